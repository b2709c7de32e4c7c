"""Property catalog, search filter, and saved-property membership."""

from typing import Iterable, Optional
from pydantic import BaseModel, Field, field_validator
from rentlink.models.property import Property, PropertyType
from rentlink.utils.logging import get_structured_logger, preview

logger = get_structured_logger(__name__)

ALL_TYPES = "All"


class PropertyFilter(BaseModel):
    """Home screen filter: property type chip plus free-text search."""
    type: str = Field(default=ALL_TYPES, description="A property type or 'All'")
    search_text: str = Field(default="", description="Matched against title and location")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, value):
        if isinstance(value, PropertyType):
            return value.value
        if value != ALL_TYPES and value not in {t.value for t in PropertyType}:
            raise ValueError(f"Unknown property type: {value}")
        return value

    def matches(self, prop: Property) -> bool:
        if self.type != ALL_TYPES and prop.type.value != self.type:
            return False
        needle = self.search_text.lower()
        return needle in prop.title.lower() or needle in prop.location.lower()


class PropertyCatalog:
    """In-memory list of listings, most recent first.

    The saved-id set is independent of the list: deleting a property leaves
    its ID in the set, and lookups for it resolve to None.
    """

    def __init__(self, properties: Optional[Iterable[Property]] = None):
        self.properties: list[Property] = list(properties or [])
        self.saved_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self.properties)

    def __iter__(self):
        return iter(self.properties)

    def add(self, prop: Property) -> None:
        """Insert a property at the front of the catalog."""
        self.properties.insert(0, prop)
        logger.info(
            "Property added to catalog",
            property_id=prop.id,
            property_type=prop.type.value,
            catalog_size=len(self.properties)
        )

    def remove(self, property_id: str) -> bool:
        """Delete a property by ID. Unknown IDs are ignored."""
        before = len(self.properties)
        self.properties = [p for p in self.properties if p.id != property_id]
        removed = len(self.properties) < before
        if removed:
            logger.info(
                "Property removed from catalog",
                property_id=property_id,
                still_saved=property_id in self.saved_ids,
                catalog_size=len(self.properties)
            )
        return removed

    def get(self, property_id: str) -> Optional[Property]:
        """Resolve an ID to a property, or None when it is not (or no longer) listed."""
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        return None

    def filter(self, criteria: PropertyFilter) -> list[Property]:
        """Return matching properties in catalog order."""
        results = [p for p in self.properties if criteria.matches(p)]
        logger.debug(
            "Catalog filtered",
            filter_type=criteria.type,
            search_text=preview(criteria.search_text),
            results_count=len(results)
        )
        return results

    def owned_by(self, owner_id: str) -> list[Property]:
        return [p for p in self.properties if p.owner_id == owner_id]

    def toggle_saved(self, property_id: str) -> bool:
        """Flip saved membership. Returns True when the ID is now saved."""
        if property_id in self.saved_ids:
            self.saved_ids.discard(property_id)
            saved = False
        else:
            self.saved_ids.add(property_id)
            saved = True

        logger.info(
            "Saved membership toggled",
            property_id=property_id,
            saved=saved,
            listed=self.get(property_id) is not None,
            saved_count=len(self.saved_ids)
        )
        return saved

    def is_saved(self, property_id: str) -> bool:
        return property_id in self.saved_ids

    def saved_properties(self) -> list[Property]:
        """Saved properties still in the catalog, in catalog order."""
        return [p for p in self.properties if p.id in self.saved_ids]
