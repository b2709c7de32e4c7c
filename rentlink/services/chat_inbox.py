"""Chat inbox state: session list, unread counters, and the active conversation."""

from typing import Callable, Iterable, Optional
from rentlink.models.chat import ChatSession, Message
from rentlink.models.property import Property
from rentlink.utils.errors import ValidationFailure
from rentlink.utils.ids import generate_chat_id, generate_message_id, now_ms
from rentlink.utils.logging import get_structured_logger, preview

logger = get_structured_logger(__name__)


class ChatInbox:
    """Conversations of the current user."""

    def __init__(
        self,
        sessions: Optional[Iterable[ChatSession]] = None,
        user_id: str = "me",
        clock: Callable[[], int] = now_ms,
    ):
        self.sessions: dict[str, ChatSession] = {s.id: s for s in sessions or []}
        self.user_id = user_id
        self.clock = clock
        self.active_session_id: Optional[str] = None

    @property
    def active_session(self) -> Optional[ChatSession]:
        if self.active_session_id is None:
            return None
        return self.sessions.get(self.active_session_id)

    def get(self, session_id: str) -> Optional[ChatSession]:
        return self.sessions.get(session_id)

    def list_sessions(self) -> list[ChatSession]:
        """All sessions, most recent message first."""
        return sorted(self.sessions.values(), key=lambda s: s.last_message_time, reverse=True)

    def total_unread(self) -> int:
        return sum(s.unread_count for s in self.sessions.values())

    def open_detail(self, session_id: str) -> ChatSession:
        """Make a session active and mark it read."""
        session = self.sessions.get(session_id)
        if session is None:
            raise KeyError(f"Unknown chat session: {session_id}")

        marked_read = session.unread_count
        session.unread_count = 0
        self.active_session_id = session_id

        logger.info(
            "Chat session opened",
            chat_id=session_id,
            property_id=session.property_id,
            messages_marked_read=marked_read
        )
        return session

    def close_detail(self) -> None:
        self.active_session_id = None

    def start_for_property(self, prop: Property) -> ChatSession:
        """Return the conversation about a property, creating it on first contact."""
        for session in self.sessions.values():
            if session.property_id == prop.id:
                return session

        session = ChatSession(
            id=generate_chat_id(),
            property_id=prop.id,
            property_name=prop.title,
            property_image=prop.cover_image or "",
            other_participant_name=prop.owner_name,
            last_message_time=self.clock(),
        )
        self.sessions[session.id] = session

        logger.info(
            "Chat session created",
            chat_id=session.id,
            property_id=prop.id,
            sessions_total=len(self.sessions)
        )
        return session

    def send(self, session_id: str, text: str) -> Message:
        """Append a message from the current user to a session transcript."""
        session = self.sessions.get(session_id)
        if session is None:
            raise KeyError(f"Unknown chat session: {session_id}")

        text = (text or "").strip()
        if not text:
            raise ValidationFailure("Message cannot be empty", field="text")

        message = Message(
            id=generate_message_id(),
            sender_id=self.user_id,
            text=text,
            timestamp=self.clock(),
        )
        session.messages.append(message)
        session.last_message = text
        session.last_message_time = message.timestamp

        logger.info(
            "Chat message sent",
            chat_id=session_id,
            message_id=message.id,
            message_preview=preview(text),
            transcript_length=len(session.messages)
        )
        return message
