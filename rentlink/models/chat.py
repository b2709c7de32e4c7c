"""Chat session and message models."""

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Single chat message."""
    id: str = Field(..., description="Message ID")
    sender_id: str = Field(..., description="Sender user ID")
    text: str = Field(..., description="Message body")
    timestamp: int = Field(..., description="Epoch milliseconds")
    is_system: bool = False


class ChatSession(BaseModel):
    """Conversation about one property.

    property_id is a weak reference: the property may be deleted later.
    property_name and property_image are a snapshot taken when the session
    was created and are never re-synced.
    """
    id: str = Field(..., description="Session ID")
    property_id: str = Field(..., description="Referenced property ID (may dangle)")
    property_name: str = Field(..., description="Property title snapshot")
    property_image: str = Field(default="", description="Property cover image snapshot")
    other_participant_name: str = Field(..., description="Counterpart display name")
    last_message: str = Field(default="", description="Preview of the latest message")
    last_message_time: int = Field(..., description="Epoch milliseconds")
    unread_count: int = Field(default=0, ge=0)
    messages: list[Message] = Field(default_factory=list, description="Transcript owned by this session")
