"""Central application state and the intents the rendering layer can send."""

from collections import deque
from typing import Callable, Iterable, Optional
from rentlink.models.chat import ChatSession
from rentlink.models.property import Property
from rentlink.models.snapshot import AppSnapshot
from rentlink.models.toast import ToastType
from rentlink.models.view_state import UserRole, ViewState
from rentlink.services.chat_inbox import ChatInbox
from rentlink.services.description_generator import DescriptionGenerator
from rentlink.services.listing_composer import ListingComposer
from rentlink.services.mock_data import current_user, seed_chats, seed_properties
from rentlink.services.navigator import Navigator
from rentlink.services.property_catalog import PropertyCatalog, PropertyFilter
from rentlink.services.scheduler import TaskScheduler
from rentlink.services.toast_manager import ToastManager
from rentlink.utils.config import AppConfig
from rentlink.utils.errors import NavigationError, ValidationFailure
from rentlink.utils.ids import now_ms
from rentlink.utils.logging import get_structured_logger, preview, traced
from rentlink.utils.logging_config import configure_logging

logger = get_structured_logger(__name__)

Listener = Callable[[str], None]


class AppStore:
    """Single owner of all process-wide state.

    Intents mutate the components, then observers are notified with a topic
    name. Notifications raised while observers are running are queued and
    delivered in order once the current round finishes.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        scheduler=None,
        generator=None,
        properties: Optional[Iterable[Property]] = None,
        chats: Optional[Iterable[ChatSession]] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.config = config or AppConfig.from_env()
        self.scheduler = scheduler or TaskScheduler()
        self.user = current_user()
        self.role = self.user.role
        self.selected_property: Optional[Property] = None
        self.home_filter = PropertyFilter()
        self.gallery_index = 0

        self._listeners: list[Listener] = []
        self._pending: deque[str] = deque()
        self._dispatching = False

        self.toasts = ToastManager(
            self.scheduler,
            duration_ms=self.config.toast_duration_ms,
            clock=clock,
            on_change=lambda: self._emit("toasts"),
        )
        self.catalog = PropertyCatalog(seed_properties() if properties is None else properties)
        self.inbox = ChatInbox(
            seed_chats(clock()) if chats is None else chats,
            user_id=self.user.id,
            clock=clock,
        )
        self.composer = ListingComposer(
            self.catalog,
            self.toasts,
            generator or DescriptionGenerator(self.config),
            require_title=self.config.require_listing_title,
            owner_id=self.user.id,
            on_change=lambda: self._emit("composer"),
        )
        self.navigator = Navigator(
            self.scheduler,
            splash_delay_ms=self.config.splash_delay_ms,
            on_change=self._on_view_change,
        )

    # Lifecycle -----------------------------------------------------------
    def start(self) -> None:
        """Show the splash screen and arm its auto-advance timer."""
        self.navigator.start()
        logger.info(
            "App started",
            view=self.view.value,
            catalog_size=len(self.catalog),
            chat_sessions=len(self.inbox.sessions)
        )

    def shutdown(self) -> None:
        """Cancel every pending timer."""
        self.navigator.teardown()
        self.toasts.clear()
        self.scheduler.cancel_all()
        logger.info("App shut down", view=self.view.value)

    # Update channel ------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an observer. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, topic: str) -> None:
        self._pending.append(topic)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for listener in list(self._listeners):
                    listener(current)
        finally:
            self._dispatching = False

    def _on_view_change(self, previous: ViewState, target: ViewState) -> None:
        if previous == ViewState.POST_AD:
            self.composer.discard()
        if target == ViewState.POST_AD:
            self.composer.begin()
        if previous == ViewState.CHAT_DETAIL:
            self.inbox.close_detail()
        self._emit("view")

    # Read-only state -----------------------------------------------------
    @property
    def view(self) -> ViewState:
        return self.navigator.current

    @property
    def selected_chat(self) -> Optional[ChatSession]:
        return self.inbox.active_session

    def snapshot(self) -> AppSnapshot:
        draft = self.composer.draft
        return AppSnapshot(
            view=self.navigator.current,
            base_view=self.navigator.base_view,
            bottom_nav_visible=self.navigator.bottom_nav_visible,
            role=self.role,
            selected_property_id=self.selected_property.id if self.selected_property else None,
            active_chat_id=self.inbox.active_session_id,
            gallery_index=self.gallery_index,
            filter_type=self.home_filter.type,
            search_text=self.home_filter.search_text,
            visible_property_ids=tuple(p.id for p in self.visible_properties()),
            saved_ids=frozenset(self.catalog.saved_ids),
            toasts=self.toasts.active,
            unread_total=self.inbox.total_unread(),
            composer_step=draft.step if draft else None,
            composer_generating=self.composer.is_generating,
        )

    def visible_properties(self) -> list[Property]:
        return self.catalog.filter(self.home_filter)

    def resolve_property(self, property_id: str) -> Optional[Property]:
        """Property for an ID, or None when it was deleted."""
        return self.catalog.get(property_id)

    def my_listings(self) -> list[Property]:
        return self.catalog.owned_by(self.user.id)

    def saved_listings(self) -> list[Property]:
        return self.catalog.saved_properties()

    def chat_sessions(self) -> list[ChatSession]:
        return self.inbox.list_sessions()

    def chat_property(self, session: ChatSession) -> Optional[Property]:
        """Property a conversation is about, or None once it was deleted."""
        return self.catalog.get(session.property_id)

    # Onboarding & auth ---------------------------------------------------
    @traced("get_started")
    def get_started(self) -> None:
        self.navigator.navigate(ViewState.AUTH)

    @traced("sign_in")
    def sign_in(self) -> None:
        self.navigator.navigate(ViewState.HOME)
        self.toasts.push("Welcome back!", ToastType.SUCCESS)

    @traced("sign_in_with_google")
    def sign_in_with_google(self) -> None:
        self.navigator.navigate(ViewState.HOME)
        self.toasts.push("Google Login Mock", ToastType.INFO)

    @traced("logout")
    def logout(self) -> None:
        self.navigator.navigate(ViewState.AUTH)
        if self.config.reset_on_logout:
            self.role = UserRole.RENTER
            self.selected_property = None
            self.gallery_index = 0
            self.inbox.close_detail()
            logger.info("Session state reset on logout")
        self.toasts.push("Logged out successfully", ToastType.INFO)

    # Navigation ----------------------------------------------------------
    @traced("navigate_tab")
    def navigate_tab(self, view: ViewState) -> None:
        """Bottom navigation bar tap."""
        self.navigator.navigate(view)

    @traced("go_back")
    def go_back(self) -> ViewState:
        return self.navigator.back()

    @traced("open_screen")
    def open_screen(self, view: ViewState) -> None:
        """Profile menu entries: Settings, Payments, Support."""
        self.navigator.navigate(view)

    # Browsing ------------------------------------------------------------
    @traced("set_search_text")
    def set_search_text(self, text: str) -> None:
        self.home_filter = self.home_filter.model_copy(update={"search_text": text or ""})
        self._emit("filter")

    @traced("set_filter_type")
    def set_filter_type(self, filter_type: str) -> None:
        self.home_filter = PropertyFilter(type=filter_type, search_text=self.home_filter.search_text)
        self._emit("filter")

    @traced("select_property")
    def select_property(self, property_id: str) -> bool:
        """Open the details screen for a listing. False when it no longer exists.

        Raises NavigationError, leaving the selection untouched, when Details
        cannot be reached from the current screen.
        """
        prop = self.catalog.get(property_id)
        if prop is None:
            logger.info("Selected property not found", property_id=property_id)
            return False
        self._require_reachable(ViewState.DETAILS)

        self.selected_property = prop
        self.gallery_index = 0
        self.navigator.navigate(ViewState.DETAILS, selected_property=prop)
        return True

    @traced("toggle_saved")
    def toggle_saved(self, property_id: str) -> bool:
        saved = self.catalog.toggle_saved(property_id)
        if saved:
            self.toasts.push("Added to Saved Homes", ToastType.SUCCESS)
        else:
            self.toasts.push("Removed from Saved", ToastType.INFO)
        self._emit("saved")
        return saved

    @traced("next_image")
    def next_image(self) -> int:
        return self._move_gallery(1)

    @traced("previous_image")
    def previous_image(self) -> int:
        return self._move_gallery(-1)

    def _move_gallery(self, step: int) -> int:
        if self.selected_property is None or not self.selected_property.images:
            return self.gallery_index
        count = len(self.selected_property.images)
        self.gallery_index = (self.gallery_index + step) % count
        self._emit("gallery")
        return self.gallery_index

    # Listing composer ----------------------------------------------------
    @traced("open_post_ad")
    def open_post_ad(self) -> None:
        self.navigator.navigate(ViewState.POST_AD)

    def update_draft(self, **fields: str) -> None:
        self.composer.update(**fields)

    @traced("advance_draft")
    def advance_draft(self) -> bool:
        return self.composer.advance()

    @traced("draft_back")
    def draft_back(self) -> bool:
        return self.composer.back()

    @traced("publish_listing")
    def publish_listing(self) -> Optional[Property]:
        """Publish the draft, switch to the owner role and show the profile."""
        prop = self.composer.publish()
        if prop is None:
            return None

        self.role = UserRole.OWNER
        self.navigator.navigate(ViewState.PROFILE)
        self._emit("role")
        return prop

    @traced("generate_description")
    async def generate_description(self) -> bool:
        return await self.composer.generate_description()

    @traced("interpret_search")
    async def interpret_search(self, query: str) -> str:
        label = await self.composer.generator.interpret_search_query(query)
        logger.info(
            "Search interpreted",
            query=preview(query),
            label=label
        )
        return label

    # Chat ----------------------------------------------------------------
    @traced("chat_now")
    def chat_now(self) -> ChatSession:
        """Start (or resume) the conversation about the selected property."""
        if self.selected_property is None:
            raise ValueError("No property selected")
        self._require_reachable(ViewState.CHAT_DETAIL)
        session = self.inbox.start_for_property(self.selected_property)
        self.open_chat(session.id)
        return session

    @traced("open_chat")
    def open_chat(self, session_id: str) -> None:
        """Open the conversation overlay; the session is marked read on entry."""
        if self.inbox.get(session_id) is None:
            raise KeyError(f"Unknown chat session: {session_id}")
        self.navigator.navigate(ViewState.CHAT_DETAIL)
        self.inbox.open_detail(session_id)
        self._emit("chat")

    @traced("close_chat")
    def close_chat(self) -> None:
        self.navigator.navigate(ViewState.CHAT)

    @traced("send_message")
    def send_message(self, text: str) -> bool:
        session = self.inbox.active_session
        if session is None:
            raise ValueError("No conversation is open")
        try:
            self.inbox.send(session.id, text)
        except ValidationFailure as e:
            self.toasts.push(e.message, ToastType.ERROR)
            return False
        self.toasts.push("Message sent!", ToastType.SUCCESS)
        self._emit("chat")
        return True

    # Profile -------------------------------------------------------------
    @traced("set_role")
    def set_role(self, role: UserRole) -> None:
        self.role = UserRole(role)
        self._emit("role")

    @traced("delete_listing")
    def delete_listing(self, property_id: str) -> bool:
        prop = self.catalog.get(property_id)
        if prop is None or prop.owner_id != self.user.id:
            logger.warning("Delete refused", property_id=property_id, found=prop is not None)
            return False

        self.catalog.remove(property_id)
        if self.selected_property is not None and self.selected_property.id == property_id:
            self.selected_property = None
            self.gallery_index = 0
        self.toasts.push("Listing deleted", ToastType.SUCCESS)
        self._emit("catalog")
        return True

    @traced("edit_listing")
    def edit_listing(self, property_id: str) -> bool:
        """Editing is not available yet. False when the listing is not the user's."""
        prop = self.catalog.get(property_id)
        if prop is None or prop.owner_id != self.user.id:
            logger.warning("Edit refused", property_id=property_id, found=prop is not None)
            return False
        logger.info("Edit requested", property_id=property_id)
        self.toasts.push("Edit mode coming soon", ToastType.INFO)
        return True

    @traced("save_settings")
    def save_settings(self) -> None:
        self.toasts.push("Settings saved!", ToastType.SUCCESS)

    @traced("withdraw_funds")
    def withdraw_funds(self) -> None:
        self.toasts.push("Withdrawal initiated!", ToastType.SUCCESS)

    @traced("contact_support")
    def contact_support(self) -> None:
        self.toasts.push("Support chat feature coming soon", ToastType.INFO)

    def _require_reachable(self, target: ViewState) -> None:
        if self.view != target and not self.navigator.can_navigate(target):
            raise NavigationError(f"Cannot navigate from {self.view.value} to {target.value}")


def create_store(config: Optional[AppConfig] = None) -> AppStore:
    """Configure logging and build a store on the running event loop."""
    configure_logging()
    config = config or AppConfig.from_env()
    logger.info(
        "Creating app store",
        llm_provider=config.llm_provider,
        reset_on_logout=config.reset_on_logout,
        require_listing_title=config.require_listing_title
    )
    return AppStore(config=config)
