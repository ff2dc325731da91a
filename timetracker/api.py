from .client import TrackerClient
from .models import CallResult


def version(client: TrackerClient) -> CallResult:
    return client.call("version")


def login(client: TrackerClient, username: str, password: str) -> CallResult:
    return client.call("login", {"username": username, "password": password})


def register(client: TrackerClient, username: str, password: str) -> CallResult:
    return client.call("register", {"username": username, "password": password})


def account(client: TrackerClient, uid: int) -> CallResult:
    return client.call("account", {"uid": str(uid)})


def new_track(client: TrackerClient, uid: int, track: str) -> CallResult:
    return client.call("new", {"track": track, "uid": str(uid)})


def count(client: TrackerClient, uid: int, track: str) -> CallResult:
    return client.call("count", {"track": track, "uid": str(uid)})


def update(client: TrackerClient, uid: int, track: str, seconds: int) -> CallResult:
    form = {
        "uid": str(uid),
        "track": track,
        "seconds": str(int(seconds)),
    }
    return client.call("update", form)


def delete(client: TrackerClient, uid: int, track: str) -> CallResult:
    return client.call("delete", {"track": track, "uid": str(uid)})
