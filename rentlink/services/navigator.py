"""View-state machine driving screen transitions."""

from typing import Callable, Optional
from rentlink.models.property import Property
from rentlink.models.view_state import ViewState
from rentlink.utils.errors import NavigationError
from rentlink.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

DEFAULT_SPLASH_DELAY_MS = 2500
SPLASH_TIMER_KEY = "splash"

# Screens without the bottom navigation bar
NAV_HIDDEN_VIEWS = frozenset({ViewState.SPLASH, ViewState.ONBOARDING, ViewState.AUTH})

# Bottom navigation tabs, reachable from any screen that shows the bar
NAV_TABS = frozenset({ViewState.HOME, ViewState.POST_AD, ViewState.CHAT, ViewState.PROFILE})

# Explicit in-screen transitions. Splash only leaves through its timer.
TRANSITIONS: dict[ViewState, frozenset] = {
    ViewState.SPLASH: frozenset(),
    ViewState.ONBOARDING: frozenset({ViewState.AUTH}),
    ViewState.AUTH: frozenset({ViewState.HOME}),
    ViewState.HOME: frozenset({ViewState.DETAILS, ViewState.POST_AD, ViewState.PROFILE}),
    ViewState.DETAILS: frozenset({ViewState.HOME, ViewState.CHAT_DETAIL}),
    ViewState.POST_AD: frozenset({ViewState.HOME, ViewState.PROFILE}),
    ViewState.CHAT: frozenset({ViewState.CHAT_DETAIL}),
    ViewState.CHAT_DETAIL: frozenset({ViewState.CHAT}),
    ViewState.PROFILE: frozenset({
        ViewState.SETTINGS,
        ViewState.PAYMENTS,
        ViewState.SUPPORT,
        ViewState.POST_AD,
        ViewState.DETAILS,
        ViewState.AUTH,
    }),
    ViewState.SETTINGS: frozenset({ViewState.PROFILE}),
    ViewState.PAYMENTS: frozenset({ViewState.PROFILE}),
    ViewState.SUPPORT: frozenset({ViewState.PROFILE}),
}


class Navigator:
    """Finite state machine over ViewState.

    ChatDetail is an overlay: while it is open the view it was opened from is
    kept in overlay_base, and closing it always lands on Chat.
    """

    def __init__(
        self,
        scheduler,
        splash_delay_ms: int = DEFAULT_SPLASH_DELAY_MS,
        on_change: Optional[Callable[[ViewState, ViewState], None]] = None,
    ):
        self.scheduler = scheduler
        self.splash_delay_ms = splash_delay_ms
        self.on_change = on_change
        self.current = ViewState.SPLASH
        self.overlay_base: Optional[ViewState] = None
        self.post_ad_origin: Optional[ViewState] = None

    @property
    def bottom_nav_visible(self) -> bool:
        return self.current not in NAV_HIDDEN_VIEWS

    @property
    def is_overlay_open(self) -> bool:
        return self.current == ViewState.CHAT_DETAIL

    @property
    def base_view(self) -> ViewState:
        """Screen rendered underneath, or the current screen when no overlay is open."""
        if self.is_overlay_open and self.overlay_base is not None:
            return self.overlay_base
        return self.current

    def start(self) -> None:
        """Arm the splash auto-advance timer."""
        if self.current == ViewState.SPLASH:
            self.scheduler.schedule(SPLASH_TIMER_KEY, self.splash_delay_ms, self._finish_splash)
            logger.info("Splash timer armed", delay_ms=self.splash_delay_ms)

    def teardown(self) -> None:
        """Cancel the splash timer so it cannot fire into a stale context."""
        self.scheduler.cancel(SPLASH_TIMER_KEY)

    def can_navigate(self, target: ViewState) -> bool:
        if target in TRANSITIONS.get(self.current, frozenset()):
            return True
        return self.bottom_nav_visible and target in NAV_TABS

    def navigate(self, target: ViewState, selected_property: Optional[Property] = None) -> ViewState:
        """Move to target, raising NavigationError when the transition is illegal."""
        target = ViewState(target)
        if target == self.current:
            return self.current

        if not self.can_navigate(target):
            raise NavigationError(f"Cannot navigate from {self.current.value} to {target.value}")
        if target == ViewState.DETAILS and selected_property is None:
            raise NavigationError("Details requires a selected property")

        self._transition(target)
        return self.current

    def back(self) -> ViewState:
        """Back action of the current screen. Root screens stay where they are."""
        if self.current == ViewState.DETAILS:
            return self.navigate(ViewState.HOME)
        if self.current == ViewState.CHAT_DETAIL:
            return self.navigate(ViewState.CHAT)
        if self.current == ViewState.POST_AD:
            origin = self.post_ad_origin
            if origin not in NAV_TABS or origin == ViewState.POST_AD:
                origin = ViewState.HOME
            return self.navigate(origin)
        if self.current in (ViewState.SETTINGS, ViewState.PAYMENTS, ViewState.SUPPORT):
            return self.navigate(ViewState.PROFILE)
        return self.current

    def _finish_splash(self) -> None:
        if self.current == ViewState.SPLASH:
            self._transition(ViewState.ONBOARDING)

    def _transition(self, target: ViewState) -> None:
        previous = self.current

        if target == ViewState.CHAT_DETAIL:
            self.overlay_base = previous
        elif previous == ViewState.CHAT_DETAIL:
            self.overlay_base = None

        if target == ViewState.POST_AD:
            self.post_ad_origin = previous
        elif previous == ViewState.POST_AD:
            self.post_ad_origin = None

        self.current = target
        if previous == ViewState.SPLASH:
            self.scheduler.cancel(SPLASH_TIMER_KEY)

        logger.info(
            "View transition",
            from_view=previous.value,
            to_view=target.value,
            overlay_base=self.overlay_base.value if self.overlay_base else None,
            bottom_nav_visible=self.bottom_nav_visible
        )

        if self.on_change is not None:
            self.on_change(previous, target)
