"""Seed records loaded at startup (no backend)."""

from rentlink.models.chat import ChatSession
from rentlink.models.property import Property, PropertyType, RentPeriod
from rentlink.models.user import User
from rentlink.models.view_state import UserRole

CURRENT_USER_ID = "me"

MINUTE_MS = 60 * 1000
DAY_MS = 24 * 60 * MINUTE_MS


def current_user() -> User:
    return User(
        id=CURRENT_USER_ID,
        name="John Doe",
        role=UserRole.RENTER,
        avatar="https://picsum.photos/100/100?random=user",
        email="john.doe@rentlink.app",
        verified=True,
    )


def seed_properties() -> list[Property]:
    """Initial catalog, most recent first."""
    return [
        Property(
            id="1",
            title="Modern Loft in Downtown",
            price=2500,
            period=RentPeriod.MONTH,
            location="Downtown, Metro City",
            type=PropertyType.APARTMENT,
            bedrooms=1,
            bathrooms=1,
            area=850,
            description=(
                "A stunning open-concept loft with high ceilings and exposed brick walls. "
                "Located just steps away from the central station."
            ),
            amenities=["WiFi", "Air Conditioning", "Gym", "Parking"],
            images=["https://picsum.photos/800/600?random=1", "https://picsum.photos/800/600?random=2"],
            owner_id=CURRENT_USER_ID,
            owner_name="John Doe",
            rating=4.8,
            reviews_count=12,
            is_verified=True,
            latitude=40.7128,
            longitude=-74.0060,
        ),
        Property(
            id="2",
            title="Cozy Family House with Garden",
            price=4200,
            period=RentPeriod.MONTH,
            location="Green Valley, Suburbs",
            type=PropertyType.HOUSE,
            bedrooms=3,
            bathrooms=2,
            area=2100,
            description=(
                "Perfect for families, this spacious home features a large backyard "
                "and a newly renovated kitchen."
            ),
            amenities=["Garden", "Garage", "Pet Friendly", "Fireplace"],
            images=["https://picsum.photos/800/600?random=3", "https://picsum.photos/800/600?random=4"],
            owner_id="owner2",
            owner_name="Mike Ross",
            rating=4.9,
            reviews_count=24,
            is_verified=True,
            latitude=40.7580,
            longitude=-73.9855,
        ),
        Property(
            id="3",
            title="Bright Studio near University",
            price=1200,
            period=RentPeriod.MONTH,
            location="University District",
            type=PropertyType.APARTMENT,
            bedrooms=0,
            bathrooms=1,
            area=400,
            description="Ideal for students. Compact, efficient, and close to campus. Includes all utilities.",
            amenities=["Furnished", "Utilities Included"],
            images=["https://picsum.photos/800/600?random=5"],
            owner_id="owner3",
            owner_name="UniRentals",
            rating=4.2,
            reviews_count=5,
            is_verified=False,
            latitude=40.7328,
            longitude=-74.0200,
        ),
    ]


def seed_chats(now: int) -> list[ChatSession]:
    """Initial inbox relative to the startup time (epoch ms)."""
    return [
        ChatSession(
            id="c1",
            property_id="1",
            property_name="Modern Loft in Downtown",
            property_image="https://picsum.photos/800/600?random=1",
            other_participant_name="Sarah Jenkins",
            last_message="Is the apartment available for viewing this weekend?",
            last_message_time=now - 30 * MINUTE_MS,
            unread_count=2,
        ),
        ChatSession(
            id="c2",
            property_id="3",
            property_name="Bright Studio",
            property_image="https://picsum.photos/800/600?random=5",
            other_participant_name="UniRentals",
            last_message="Great, thanks for the info!",
            last_message_time=now - DAY_MS,
            unread_count=0,
        ),
    ]
