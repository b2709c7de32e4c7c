"""Toast notification model."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ToastType(str, Enum):
    """Toast severity."""
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Toast(BaseModel):
    """Short-lived user notification."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Monotonic, time-derived ID")
    message: str = Field(..., description="Text shown to the user")
    type: ToastType = Field(default=ToastType.INFO)
    created_at: int = Field(..., description="Epoch milliseconds")
