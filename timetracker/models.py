from dataclasses import dataclass
from typing import Optional

MESSAGE_TTL_SECONDS = 5.0

# The server issues no token material; any non-empty value marks a login.
TOKEN_SENTINEL = "filled"


@dataclass
class CallResult:
    ok: bool
    body: str


@dataclass
class AuthToken:
    token: str = ""
    username: str = ""
    uid: int = 0
    expires_at: Optional[float] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


@dataclass
class LastMessage:
    ok: bool
    text: str
    shown_at: float

    def expired(self, now: float) -> bool:
        return now - self.shown_at > MESSAGE_TTL_SECONDS
