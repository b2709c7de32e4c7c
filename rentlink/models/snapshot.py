"""Read-only view of the application state handed to the rendering layer."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from rentlink.models.toast import Toast
from rentlink.models.view_state import UserRole, ViewState


class AppSnapshot(BaseModel):
    """Immutable copy of everything a screen needs to draw itself."""
    model_config = ConfigDict(frozen=True)

    view: ViewState
    base_view: ViewState = Field(..., description="Screen under the ChatDetail overlay, else view")
    bottom_nav_visible: bool
    role: UserRole
    selected_property_id: Optional[str] = None
    active_chat_id: Optional[str] = None
    gallery_index: int = 0
    filter_type: str = "All"
    search_text: str = ""
    visible_property_ids: tuple[str, ...] = ()
    saved_ids: frozenset[str] = frozenset()
    toasts: tuple[Toast, ...] = ()
    unread_total: int = 0
    composer_step: Optional[int] = Field(None, description="None when no draft is open")
    composer_generating: bool = False
