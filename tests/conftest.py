"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import Mock, AsyncMock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("LLM_PROVIDER", "anthropic")
os.environ.setdefault("LOG_FORMAT", "text")

from rentlink.services.app_state import AppStore
from rentlink.services.listing_composer import ListingComposer
from rentlink.services.mock_data import seed_properties
from rentlink.services.property_catalog import PropertyCatalog
from rentlink.services.toast_manager import ToastManager
from rentlink.utils.config import AppConfig
from tests.utils.helpers import ManualScheduler, drive_to_home


@pytest.fixture
def scheduler():
    """Manual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def app_config():
    """Configuration with the documented defaults, independent of the environment."""
    return AppConfig()


@pytest.fixture
def mock_generator():
    """Mock text generation capability."""
    generator = Mock()
    generator.generate_description = AsyncMock(
        return_value="Sunny two-bedroom apartment steps from the metro."
    )
    generator.interpret_search_query = AsyncMock(return_value="2-bed Apartment in Downtown")
    return generator


@pytest.fixture
def toast_manager(scheduler):
    return ToastManager(scheduler, clock=scheduler.clock)


@pytest.fixture
def catalog():
    """Catalog loaded with the seed listings."""
    return PropertyCatalog(seed_properties())


@pytest.fixture
def composer(catalog, toast_manager, mock_generator):
    composer = ListingComposer(catalog, toast_manager, mock_generator)
    composer.begin()
    return composer


@pytest.fixture
def store(app_config, scheduler, mock_generator):
    """App store on the splash screen, not started."""
    store = AppStore(
        config=app_config,
        scheduler=scheduler,
        generator=mock_generator,
        clock=scheduler.clock,
    )
    yield store
    store.shutdown()


@pytest.fixture
def home_store(store):
    """App store signed in and showing Home."""
    drive_to_home(store)
    return store


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time


@pytest.fixture(scope="function")
def reset_environment():
    """Restore environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
