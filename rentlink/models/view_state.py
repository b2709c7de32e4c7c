"""Screen identifiers and user roles."""

from enum import Enum


class ViewState(str, Enum):
    """Top-level screens of the app."""
    SPLASH = "SPLASH"
    ONBOARDING = "ONBOARDING"
    AUTH = "AUTH"
    HOME = "HOME"
    DETAILS = "DETAILS"
    POST_AD = "POST_AD"
    CHAT = "CHAT"
    CHAT_DETAIL = "CHAT_DETAIL"
    PROFILE = "PROFILE"
    SETTINGS = "SETTINGS"
    PAYMENTS = "PAYMENTS"
    SUPPORT = "SUPPORT"


class UserRole(str, Enum):
    """Role of the signed-in user. Conditions what Profile and Payments show."""
    RENTER = "RENTER"
    OWNER = "OWNER"
