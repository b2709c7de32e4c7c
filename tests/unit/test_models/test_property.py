"""Tests for Property model."""

import pytest
from pydantic import ValidationError
from rentlink.models.property import Property, PropertyType, RentPeriod
from tests.utils.factories import create_property


def _property(**overrides) -> Property:
    data = {
        "id": "p1",
        "title": "Modern Loft in Downtown",
        "price": 2500,
        "location": "Downtown, Metro City",
        "type": "Apartment",
        "area": 850,
        "owner_id": "me",
        "owner_name": "John Doe",
    }
    data.update(overrides)
    return Property(**data)


@pytest.mark.unit
def test_property_valid():
    """Test valid property creation with defaults."""
    prop = _property()

    assert prop.type == PropertyType.APARTMENT
    assert prop.period == RentPeriod.MONTH
    assert prop.bedrooms == 0
    assert prop.amenities == []
    assert prop.images == []
    assert prop.views is None
    assert prop.latitude == 0.0 and prop.longitude == 0.0


@pytest.mark.unit
@pytest.mark.parametrize("price", [0, -100])
def test_property_price_must_be_positive(price):
    with pytest.raises(ValidationError):
        _property(price=price)


@pytest.mark.unit
def test_property_area_must_be_positive():
    with pytest.raises(ValidationError):
        _property(area=0)


@pytest.mark.unit
@pytest.mark.parametrize("rating", [-0.1, 5.1])
def test_property_rating_bounds(rating):
    with pytest.raises(ValidationError):
        _property(rating=rating)


@pytest.mark.unit
def test_property_unknown_type_rejected():
    with pytest.raises(ValidationError):
        _property(type="Villa")


@pytest.mark.unit
def test_property_defaults_to_unrated():
    prop = _property()

    assert prop.rating is None
    assert prop.is_rated is False
    assert prop.rating_label == "New"


@pytest.mark.unit
def test_property_zero_rating_is_rated():
    """A zero score is a rating, unlike an absent one."""
    prop = _property(rating=0, reviews_count=0)

    assert prop.is_rated is True
    assert prop.rating_label == "0"


@pytest.mark.unit
def test_property_with_reviews_shows_rating():
    prop = _property(rating=4.8, reviews_count=12)

    assert prop.is_rated is True
    assert prop.rating_label == "4.8"


@pytest.mark.unit
def test_property_cover_image_degrades_without_images():
    assert _property(images=[]).cover_image is None
    assert _property(images=["a.jpg", "b.jpg"]).cover_image == "a.jpg"


@pytest.mark.unit
def test_property_factory_produces_valid_records():
    prop = create_property(type=PropertyType.SHOP)

    assert prop.type == PropertyType.SHOP
    assert prop.price > 0
