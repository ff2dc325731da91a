from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..dispatch import PendingCall
from ..models import AuthToken, LastMessage
from ..session import SessionClock


class Screen(Enum):
    LOGIN = "login"
    TRACK_PICKER = "track_picker"
    CLOSE_CONFIRM = "close_confirm"
    LOGOUT_CONFIRM = "logout_confirm"
    TIMER = "timer"


@dataclass
class AppState:
    auth: AuthToken = field(default_factory=AuthToken)
    track_name: str = ""
    clock: SessionClock = field(default_factory=SessionClock)
    pending: Optional[PendingCall] = None
    last_message: Optional[LastMessage] = None
    track_names: List[str] = field(default_factory=list)
    tracks_cached: bool = False
    prompted_close: bool = False
    prompted_logout: bool = False
    should_close: bool = False
    # Bumped on logout; results dispatched under an older epoch are dropped.
    epoch: int = 0

    def screen(self) -> Screen:
        if not self.auth.is_authenticated:
            return Screen.LOGIN
        if not self.track_name:
            return Screen.TRACK_PICKER
        if self.prompted_close:
            return Screen.CLOSE_CONFIRM
        if self.prompted_logout:
            return Screen.LOGOUT_CONFIRM
        return Screen.TIMER

    def call_pending(self) -> bool:
        return self.pending is not None and not self.pending.ready()

    def set_message(self, ok: bool, text: str, now: float) -> None:
        self.last_message = LastMessage(ok=ok, text=text, shown_at=now)

    def visible_message(self, now: float) -> Optional[LastMessage]:
        if self.last_message is None:
            return None
        if not self.last_message.text or self.last_message.expired(now):
            self.last_message = None
            return None
        return self.last_message
