"""Tests for Navigator view-state machine."""

import pytest
from unittest.mock import Mock
from rentlink.models.view_state import ViewState
from rentlink.services.navigator import (
    DEFAULT_SPLASH_DELAY_MS,
    NAV_TABS,
    SPLASH_TIMER_KEY,
    Navigator,
)
from rentlink.utils.errors import NavigationError
from tests.utils.factories import create_property


@pytest.fixture
def navigator(scheduler):
    return Navigator(scheduler)


@pytest.fixture
def home_navigator(navigator):
    navigator.start()
    navigator.scheduler.advance(DEFAULT_SPLASH_DELAY_MS)
    navigator.navigate(ViewState.AUTH)
    navigator.navigate(ViewState.HOME)
    return navigator


@pytest.mark.unit
class TestSplash:
    """Test suite for the splash timer."""

    def test_initial_state(self, navigator):
        assert navigator.current == ViewState.SPLASH
        assert navigator.bottom_nav_visible is False

    def test_splash_advances_after_delay(self, scheduler, navigator):
        navigator.start()

        scheduler.advance(DEFAULT_SPLASH_DELAY_MS - 1)
        assert navigator.current == ViewState.SPLASH

        scheduler.advance(1)
        assert navigator.current == ViewState.ONBOARDING

    def test_splash_has_no_manual_exit(self, navigator):
        for target in (ViewState.HOME, ViewState.AUTH, ViewState.ONBOARDING):
            assert navigator.can_navigate(target) is False
            with pytest.raises(NavigationError):
                navigator.navigate(target)

    def test_teardown_cancels_splash_timer(self, scheduler, navigator):
        navigator.start()

        navigator.teardown()
        scheduler.advance(DEFAULT_SPLASH_DELAY_MS * 2)

        assert navigator.current == ViewState.SPLASH
        assert not scheduler.is_scheduled(SPLASH_TIMER_KEY)

    def test_custom_splash_delay(self, scheduler):
        navigator = Navigator(scheduler, splash_delay_ms=100)
        navigator.start()

        scheduler.advance(100)

        assert navigator.current == ViewState.ONBOARDING


@pytest.mark.unit
class TestTransitions:
    """Test suite for legal and illegal transitions."""

    def test_onboarding_flow(self, home_navigator):
        assert home_navigator.current == ViewState.HOME
        assert home_navigator.bottom_nav_visible is True

    @pytest.mark.parametrize("view", [ViewState.ONBOARDING, ViewState.AUTH])
    def test_nav_hidden_before_sign_in(self, scheduler, navigator, view):
        navigator.start()
        scheduler.advance(DEFAULT_SPLASH_DELAY_MS)
        if view == ViewState.AUTH:
            navigator.navigate(ViewState.AUTH)

        assert navigator.current == view
        assert navigator.bottom_nav_visible is False
        assert navigator.can_navigate(ViewState.HOME) is (view == ViewState.AUTH)
        assert navigator.can_navigate(ViewState.CHAT) is False

    @pytest.mark.parametrize("tab", sorted(NAV_TABS, key=lambda v: v.value))
    def test_tabs_reachable_from_any_visible_screen(self, home_navigator, tab):
        home_navigator.navigate(ViewState.PROFILE)
        home_navigator.navigate(ViewState.SETTINGS)

        assert home_navigator.navigate(tab) == tab

    def test_details_requires_property(self, home_navigator):
        with pytest.raises(NavigationError):
            home_navigator.navigate(ViewState.DETAILS)
        assert home_navigator.current == ViewState.HOME

    def test_illegal_transition_leaves_state(self, home_navigator):
        with pytest.raises(NavigationError):
            home_navigator.navigate(ViewState.SETTINGS)
        assert home_navigator.current == ViewState.HOME

    def test_navigate_to_current_is_noop(self, home_navigator):
        on_change = Mock()
        home_navigator.on_change = on_change

        assert home_navigator.navigate(ViewState.HOME) == ViewState.HOME
        on_change.assert_not_called()

    def test_on_change_receives_previous_and_target(self, home_navigator):
        on_change = Mock()
        home_navigator.on_change = on_change

        home_navigator.navigate(ViewState.PROFILE)

        on_change.assert_called_once_with(ViewState.HOME, ViewState.PROFILE)

    def test_logout_from_profile(self, home_navigator):
        home_navigator.navigate(ViewState.PROFILE)

        assert home_navigator.navigate(ViewState.AUTH) == ViewState.AUTH
        assert home_navigator.bottom_nav_visible is False


@pytest.mark.unit
class TestBack:
    """Test suite for back actions and the chat overlay."""

    def test_details_back_to_home(self, home_navigator):
        home_navigator.navigate(ViewState.DETAILS, selected_property=create_property())

        assert home_navigator.back() == ViewState.HOME

    def test_chat_detail_from_details_returns_to_chat(self, home_navigator):
        home_navigator.navigate(ViewState.DETAILS, selected_property=create_property())
        home_navigator.navigate(ViewState.CHAT_DETAIL)

        assert home_navigator.is_overlay_open is True
        assert home_navigator.base_view == ViewState.DETAILS

        assert home_navigator.back() == ViewState.CHAT
        assert home_navigator.is_overlay_open is False
        assert home_navigator.overlay_base is None
        assert home_navigator.base_view == ViewState.CHAT

    def test_chat_detail_from_chat(self, home_navigator):
        home_navigator.navigate(ViewState.CHAT)
        home_navigator.navigate(ViewState.CHAT_DETAIL)

        assert home_navigator.base_view == ViewState.CHAT
        assert home_navigator.back() == ViewState.CHAT

    @pytest.mark.parametrize("origin", [ViewState.HOME, ViewState.PROFILE, ViewState.CHAT])
    def test_post_ad_back_returns_to_origin(self, home_navigator, origin):
        home_navigator.navigate(origin)
        home_navigator.navigate(ViewState.POST_AD)

        assert home_navigator.post_ad_origin == origin
        assert home_navigator.back() == origin
        assert home_navigator.post_ad_origin is None

    def test_post_ad_back_from_non_tab_goes_home(self, home_navigator):
        home_navigator.navigate(ViewState.DETAILS, selected_property=create_property())
        home_navigator.navigate(ViewState.POST_AD)

        assert home_navigator.back() == ViewState.HOME

    @pytest.mark.parametrize("leaf", [ViewState.SETTINGS, ViewState.PAYMENTS, ViewState.SUPPORT])
    def test_profile_leaves_back_to_profile(self, home_navigator, leaf):
        home_navigator.navigate(ViewState.PROFILE)
        home_navigator.navigate(leaf)

        assert home_navigator.back() == ViewState.PROFILE

    def test_back_on_root_screen_stays(self, home_navigator):
        assert home_navigator.back() == ViewState.HOME
