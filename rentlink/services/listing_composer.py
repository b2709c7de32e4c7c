"""Two-step listing composer with AI-assisted description generation."""

import math
from typing import Callable, Optional
from rentlink.models.listing_draft import DEFAULT_HIGHLIGHTS, DescriptionFeatures, ListingDraft
from rentlink.models.property import Property, PropertyType, RentPeriod
from rentlink.models.toast import ToastType
from rentlink.services.property_catalog import PropertyCatalog
from rentlink.services.toast_manager import ToastManager
from rentlink.utils.errors import (
    AIServiceUnavailableError,
    DescriptionGenerationError,
    ValidationFailure,
)
from rentlink.utils.ids import MonotonicIdGenerator, generate_draft_id
from rentlink.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# Placeholder values for fields the composer does not collect
DEFAULT_BATHROOMS = 1
DEFAULT_AREA_SQFT = 1000
DEFAULT_AMENITIES = ("WiFi",)
PLACEHOLDER_IMAGE_URL = "https://picsum.photos/800/600?random={seed}"

MSG_STEP1_REQUIRED = "Please fill in location and price"
MSG_PUBLISH_REQUIRED = "Please fill in all required fields."
MSG_INVALID_PRICE = "Please enter a valid price"
MSG_INVALID_BEDROOMS = "Please enter a valid number of bedrooms"
MSG_INVALID_TYPE = "Please choose a property type"
MSG_PUBLISHED = "Listing published successfully!"
MSG_GENERATE_REQUIRED = "Please enter Type and Location first."
MSG_GENERATED = "Description generated!"
MSG_GENERATE_FAILED = "Failed to generate description"
MSG_AI_UNAVAILABLE = "AI services unavailable. Please check API Key."

DRAFT_FIELDS = frozenset({"title", "type", "price", "location", "bedrooms", "description", "highlights"})


def parse_price(text: str) -> float:
    """Parse raw price text into a positive amount."""
    try:
        price = float(text.strip())
    except (AttributeError, ValueError):
        raise ValidationFailure(MSG_INVALID_PRICE, field="price")
    if not math.isfinite(price) or price <= 0:
        raise ValidationFailure(MSG_INVALID_PRICE, field="price")
    return price


def parse_bedrooms(text: str) -> int:
    """Parse raw bedrooms text. Blank means zero (studio)."""
    text = (text or "").strip()
    if not text:
        return 0
    try:
        value = float(text)
    except ValueError:
        raise ValidationFailure(MSG_INVALID_BEDROOMS, field="bedrooms")
    if not math.isfinite(value) or value < 0 or value != int(value):
        raise ValidationFailure(MSG_INVALID_BEDROOMS, field="bedrooms")
    return int(value)


def bedrooms_for_generation(text: str) -> int:
    """Bedroom count sent to the generator: 1 when blank, zero, or unparseable."""
    try:
        return parse_bedrooms(text) or 1
    except ValidationFailure:
        return 1


class ListingComposer:
    """Composer state machine: {step 1, step 2} x {idle, generating}.

    A draft exists only while the composer screen is open. Description
    results are written to the draft that requested them, never to a later
    one.
    """

    def __init__(
        self,
        catalog: PropertyCatalog,
        toasts: ToastManager,
        generator,
        require_title: bool = False,
        owner_id: str = "me",
        owner_name: str = "You",
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.catalog = catalog
        self.toasts = toasts
        self.generator = generator
        self.require_title = require_title
        self.owner_id = owner_id
        self.owner_name = owner_name
        self.on_change = on_change
        self.draft: Optional[ListingDraft] = None
        self._property_ids = MonotonicIdGenerator()

    @property
    def is_generating(self) -> bool:
        return self.draft is not None and self.draft.is_generating

    def begin(self) -> ListingDraft:
        """Start a fresh draft, replacing any previous one."""
        self.draft = ListingDraft(draft_id=generate_draft_id())
        logger.info("Listing draft started", draft_id=self.draft.draft_id)
        return self.draft

    def discard(self) -> None:
        """Drop the current draft without publishing."""
        if self.draft is not None:
            logger.info(
                "Listing draft discarded",
                draft_id=self.draft.draft_id,
                step=self.draft.step,
                generation_pending=self.draft.is_generating
            )
        self.draft = None

    def update(self, **fields: str) -> ListingDraft:
        """Set raw form fields on the current draft."""
        draft = self._require_draft()
        unknown = set(fields) - DRAFT_FIELDS
        if unknown:
            raise ValueError(f"Unknown draft fields: {sorted(unknown)}")
        for name, value in fields.items():
            setattr(draft, name, value)
        self._changed()
        return draft

    def advance(self) -> bool:
        """Step 1 -> step 2. Refused (with an error toast) while location or price is missing."""
        draft = self._require_draft()
        try:
            if not draft.location.strip() or not draft.price.strip():
                raise ValidationFailure(MSG_STEP1_REQUIRED)
            parse_price(draft.price)
        except ValidationFailure as e:
            self._reject("advance", e)
            return False

        draft.step = 2
        logger.info("Listing draft advanced", draft_id=draft.draft_id, step=draft.step)
        self._changed()
        return True

    def back(self) -> bool:
        """Step 2 -> step 1."""
        draft = self._require_draft()
        if draft.step == 1:
            return False
        draft.step = 1
        self._changed()
        return True

    def publish(self) -> Optional[Property]:
        """Turn the draft into a listing at the front of the catalog.

        Returns the new property, or None when validation refused it.
        """
        draft = self._require_draft()
        try:
            prop = self._build_property(draft)
        except ValidationFailure as e:
            self._reject("publish", e)
            return None

        self.catalog.add(prop)
        self.toasts.push(MSG_PUBLISHED, ToastType.SUCCESS)

        logger.info(
            "Listing published",
            draft_id=draft.draft_id,
            property_id=prop.id,
            property_type=prop.type.value,
            used_fallback_title=not draft.title.strip()
        )
        self.draft = None
        self._changed()
        return prop

    async def generate_description(self) -> bool:
        """Fill the draft description through the text generation capability.

        Returns True when a description was written. Loading is cleared on
        every path.
        """
        draft = self._require_draft()
        if draft.is_generating:
            logger.debug("Description generation already in flight", draft_id=draft.draft_id)
            return False

        if not draft.type.strip() or not draft.location.strip():
            self._reject("generate_description", ValidationFailure(MSG_GENERATE_REQUIRED))
            return False

        features = DescriptionFeatures(
            type=draft.type,
            location=draft.location,
            bedrooms=bedrooms_for_generation(draft.bedrooms),
            highlights=draft.highlights.strip() or DEFAULT_HIGHLIGHTS,
        )

        draft.is_generating = True
        self._changed()
        failure_message = None
        try:
            description = await self.generator.generate_description(features)
            if not description or not description.strip():
                raise DescriptionGenerationError("Empty description returned")
        except AIServiceUnavailableError as e:
            logger.warning("AI services unavailable", draft_id=draft.draft_id, error=str(e))
            failure_message = MSG_AI_UNAVAILABLE
        except Exception as e:
            logger.error(
                "Description generation failed",
                draft_id=draft.draft_id,
                error=str(e),
                exc_info=True
            )
            failure_message = MSG_GENERATE_FAILED
        finally:
            draft.is_generating = False
            self._changed()

        if self.draft is not draft:
            logger.info(
                "Generation outcome dropped, draft no longer active",
                draft_id=draft.draft_id,
                failed=failure_message is not None
            )
            return False

        if failure_message is not None:
            self.toasts.push(failure_message, ToastType.ERROR)
            return False

        draft.description = description.strip()
        self.toasts.push(MSG_GENERATED, ToastType.SUCCESS)
        logger.info(
            "Description written to draft",
            draft_id=draft.draft_id,
            description_length=len(draft.description)
        )
        self._changed()
        return True

    def _build_property(self, draft: ListingDraft) -> Property:
        missing_title = self.require_title and not draft.title.strip()
        if missing_title or not draft.price.strip() or not draft.location.strip():
            raise ValidationFailure(MSG_PUBLISH_REQUIRED)

        try:
            prop_type = PropertyType(draft.type)
        except ValueError:
            raise ValidationFailure(MSG_INVALID_TYPE, field="type")

        price = parse_price(draft.price)
        bedrooms = parse_bedrooms(draft.bedrooms)
        property_id = str(self._property_ids.next_id())

        return Property(
            id=property_id,
            title=draft.title.strip() or f"{bedrooms}-Bed {prop_type.value}",
            price=price,
            period=RentPeriod.MONTH,
            location=draft.location.strip(),
            type=prop_type,
            bedrooms=bedrooms,
            bathrooms=DEFAULT_BATHROOMS,
            area=DEFAULT_AREA_SQFT,
            description=draft.description,
            amenities=list(DEFAULT_AMENITIES),
            images=[PLACEHOLDER_IMAGE_URL.format(seed=property_id)],
            owner_id=self.owner_id,
            owner_name=self.owner_name,
            rating=None,
            reviews_count=0,
            is_verified=True,
            latitude=0,
            longitude=0,
        )

    def _reject(self, action: str, failure: ValidationFailure) -> None:
        logger.info(
            "Composer action refused",
            action=action,
            draft_id=self.draft.draft_id if self.draft else None,
            field=failure.field,
            reason=failure.message
        )
        self.toasts.push(failure.message, ToastType.ERROR)

    def _require_draft(self) -> ListingDraft:
        if self.draft is None:
            raise RuntimeError("No listing draft is open")
        return self.draft

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
