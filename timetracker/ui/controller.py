import time
from typing import Callable, Optional

from endpoints import DEFAULT_WINDOW_TITLE
from .. import api
from ..dispatch import CallDispatcher, PendingCall
from ..models import AuthToken, CallResult, LastMessage
from ..replies import apply_reply, parse_reply
from ..utils import get_logger
from .state import AppState, Screen


class TrackerController:
    """Owns the application state and every action the screens can take.

    The window calls ``tick()`` once per frame: it consumes a finished call,
    expires the status message and starts the track list fetch when needed.
    """

    def __init__(
        self,
        dispatcher: CallDispatcher,
        state: Optional[AppState] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = state or AppState()
        self._dispatcher = dispatcher
        self._clock = clock
        self.logger = get_logger("timetracker")

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _dispatch(self, fn: Callable[..., CallResult], *args) -> PendingCall:
        call = self._dispatcher.dispatch(fn, *args, epoch=self.state.epoch)
        if self.state.pending is not None and not self.state.pending.taken:
            self.logger.debug(
                "Abandoning %s #%d for %s #%d",
                self.state.pending.label,
                self.state.pending.request_id,
                call.label,
                call.request_id,
            )
        self.state.pending = call
        return call

    # Frame loop

    def tick(self, now: Optional[float] = None) -> Screen:
        now = self._now(now)
        call = self.state.pending
        if call is not None and call.ready():
            self.state.pending = None
            result = call.take()
            if call.epoch != self.state.epoch:
                self.logger.info(
                    "Dropping %s #%d result from a previous session", call.label, call.request_id
                )
            else:
                try:
                    self._apply(result, now)
                except Exception:
                    self.logger.exception("Failed to apply %s #%d result", call.label, call.request_id)

        self.state.visible_message(now)

        if (
            self.state.screen() is Screen.TRACK_PICKER
            and not self.state.tracks_cached
            and self.state.pending is None
        ):
            self.state.track_names = []
            self._dispatch(api.account, self.state.auth.uid)
            self.state.tracks_cached = True
        return self.state.screen()

    def _apply(self, result: CallResult, now: float) -> None:
        self.logger.debug("API call: %s", "Success" if result.ok else "Error")
        self.logger.debug("API result: %s", result.body)
        if not result.ok:
            self.state.set_message(False, result.body, now)
            return
        apply_reply(self.state, parse_reply(result.body), now)

    def message(self, now: Optional[float] = None) -> Optional[LastMessage]:
        return self.state.visible_message(self._now(now))

    def window_title(self) -> str:
        if self.state.auth.is_authenticated:
            return f"({self.state.auth.username}) Time Tracker"
        return DEFAULT_WINDOW_TITLE

    # Login screen

    def can_submit_credentials(self, username: str, password: str) -> bool:
        return not self.state.call_pending() and bool(username) and bool(password)

    def login(self, username: str, password: str) -> bool:
        if not self.can_submit_credentials(username, password):
            return False
        self.logger.info("Logging in as %s", username)
        self._dispatch(api.login, username, password)
        return True

    def register(self, username: str, password: str) -> bool:
        if not self.can_submit_credentials(username, password):
            return False
        self.logger.info("Registering %s", username)
        self._dispatch(api.register, username, password)
        return True

    # Track picker

    def select_track(self, name: str) -> None:
        if not name:
            return
        self.logger.info("Selected track %s", name)
        self.state.track_name = name
        self.state.tracks_cached = False
        self._dispatch(api.count, self.state.auth.uid, name)

    def create_track(self, name: str) -> bool:
        name = name.strip()
        if not name:
            return False
        self._dispatch(api.new_track, self.state.auth.uid, name)
        self.state.tracks_cached = False
        return True

    def delete_track(self, name: str) -> None:
        # Removed locally right away; the server answer only updates the message.
        if name in self.state.track_names:
            self.state.track_names.remove(name)
        self._dispatch(api.delete, self.state.auth.uid, name)

    # Timer

    def toggle_counting(self, now: Optional[float] = None) -> bool:
        return self.state.clock.toggle(self._now(now))

    def can_sync(self) -> bool:
        return not self.state.call_pending()

    def can_save(self) -> bool:
        clock = self.state.clock
        return self.can_sync() and not clock.counting and clock.session_seconds > 0

    def sync(self) -> bool:
        if not self.can_sync():
            return False
        self._dispatch(api.count, self.state.auth.uid, self.state.track_name)
        return True

    def save(self) -> bool:
        if not self.can_save():
            return False
        self._dispatch(
            api.update,
            self.state.auth.uid,
            self.state.track_name,
            self.state.clock.session_seconds,
        )
        return True

    def can_reset(self) -> bool:
        return self.can_save()

    def reset(self) -> bool:
        # A pending SAVEACK still has to merge the session it was sent with.
        if not self.can_reset():
            return False
        self.state.clock.reset()
        return True

    # Dialogs

    def request_close(self) -> bool:
        """Return True when the window may close right away."""
        if self.state.screen() in (Screen.LOGIN, Screen.TRACK_PICKER):
            self.state.should_close = True
            return True
        self.state.prompted_close = True
        return False

    def answer_close(self, confirmed: bool) -> bool:
        self.state.prompted_close = False
        if confirmed:
            self.state.should_close = True
        return confirmed

    def request_logout(self, now: Optional[float] = None) -> bool:
        """Return True when the logout happened without asking."""
        if self.state.clock.session_total(self._now(now)) == 0:
            self._logout()
            return True
        self.state.prompted_logout = True
        return False

    def answer_logout(self, confirmed: bool) -> bool:
        if confirmed:
            self._logout()
        else:
            self.state.prompted_logout = False
        return confirmed

    def _logout(self) -> None:
        self.logger.info("Logging out %s", self.state.auth.username)
        self.state.clock.clear()
        self.state.auth = AuthToken()
        self.state.track_name = ""
        self.state.track_names = []
        self.state.tracks_cached = False
        self.state.prompted_logout = False
        self.state.epoch += 1
