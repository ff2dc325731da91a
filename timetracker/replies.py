"""Classification of server responses and their effect on application state.

The server tags structured payloads with a ``behavior`` field; every shape it
can send maps onto exactly one ``Reply`` variant below.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .models import TOKEN_SENTINEL, AuthToken
from .ui.state import AppState
from .utils import get_logger, truncate_text

BAD_AUTH = "Bad auth."
SYNCED = "Synced successfully!"
UNKNOWN_RESPONSE = "Unknown response. See the log for details."

logger = get_logger("timetracker")


@dataclass(frozen=True)
class Reply:
    ok: bool
    message: str


@dataclass(frozen=True)
class Malformed(Reply):
    pass


@dataclass(frozen=True)
class ApiError(Reply):
    pass


@dataclass(frozen=True)
class Notice(Reply):
    pass


@dataclass(frozen=True)
class Unrecognized(Reply):
    raw: str = ""


@dataclass(frozen=True)
class VersionInfo(Reply):
    name: str = ""
    description: str = ""
    version: str = ""


@dataclass(frozen=True)
class Authenticated(Reply):
    username: str = ""
    uid: int = 0


@dataclass(frozen=True)
class BadAuth(Reply):
    pass


@dataclass(frozen=True)
class AccountInfo(Reply):
    tracks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SaveAck(Reply):
    pass


@dataclass(frozen=True)
class TrackInfo(Reply):
    track: str = ""
    seconds: Optional[int] = None


@dataclass(frozen=True)
class UnknownBehavior(Reply):
    behavior: str = ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _version(root: Dict[str, Any], message: str) -> Reply:
    return VersionInfo(
        True,
        message,
        name=_text(root.get("name")),
        description=_text(root.get("description")),
        version=_text(root.get("version")),
    )


def _authentication(root: Dict[str, Any], message: str) -> Reply:
    if "username" not in root or "uid" not in root:
        return BadAuth(False, BAD_AUTH)
    uid = _int_or_none(root["uid"])
    if uid is None:
        return BadAuth(False, BAD_AUTH)
    return Authenticated(True, message, username=_text(root["username"]), uid=uid)


def _account(root: Dict[str, Any], message: str) -> Reply:
    tracks = []
    entries = root.get("tracks")
    if isinstance(entries, list):
        for entry in entries:
            if isinstance(entry, dict) and "track" in entry:
                tracks.append(_text(entry["track"]))
    return AccountInfo(True, message, tracks=tracks)


def _save_ack(root: Dict[str, Any], message: str) -> Reply:
    return SaveAck(True, message)


def _track_info(root: Dict[str, Any], message: str) -> Reply:
    seconds = _int_or_none(root.get("seconds"))
    if seconds is not None:
        message = SYNCED
    return TrackInfo(True, message, track=_text(root.get("track")), seconds=seconds)


_BEHAVIORS: Dict[str, Callable[[Dict[str, Any], str], Reply]] = {
    "VERSION": _version,
    "AUTHENTICATION": _authentication,
    "ACCOUNT": _account,
    "SAVEACK": _save_ack,
    "TRACKINFO": _track_info,
}


def parse_reply(body: str) -> Reply:
    try:
        root = json.loads(body)
    except ValueError as exc:
        return Malformed(False, str(exc))
    if not isinstance(root, dict):
        return Malformed(False, f"Expected a JSON object, got {type(root).__name__}")
    if "error" in root:
        return ApiError(False, _text(root["error"]))
    if "behavior" in root:
        behavior = _text(root["behavior"])
        message = _text(root.get("message"))
        parser = _BEHAVIORS.get(behavior)
        if parser is None:
            return UnknownBehavior(True, message, behavior=behavior)
        return parser(root, message)
    if "message" in root:
        return Notice(True, _text(root["message"]))
    return Unrecognized(False, UNKNOWN_RESPONSE, raw=body)


def apply_reply(state: AppState, reply: Reply, now: float) -> None:
    state.set_message(reply.ok, reply.message, now)

    if isinstance(reply, Authenticated):
        state.auth = AuthToken(token=TOKEN_SENTINEL, username=reply.username, uid=reply.uid)
        logger.info("Logged in as %s (uid=%d)", reply.username, reply.uid)
    elif isinstance(reply, AccountInfo):
        state.track_names = list(reply.tracks)
        logger.debug("Account tracks: %s", reply.tracks)
    elif isinstance(reply, SaveAck):
        state.clock.merge_saved()
    elif isinstance(reply, TrackInfo):
        if reply.seconds is not None:
            state.clock.saved_seconds = reply.seconds
    elif isinstance(reply, VersionInfo):
        logger.info("Server: %s %s (%s)", reply.name, reply.version, reply.description)
    elif isinstance(reply, UnknownBehavior):
        logger.debug("Unhandled behavior %s", reply.behavior)
    elif isinstance(reply, Unrecognized):
        logger.warning("Unknown response: %s", truncate_text(reply.raw))
