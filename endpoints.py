# Routes served by the time tracker server; update if the server changes.

BASE_URL = "https://127.0.0.1:5540"

DEFAULT_WINDOW_TITLE = "Time Tracker: Log work time!"

API = {
    "version": {
        "method": "GET",
        "path": "/api/version",
    },
    "login": {
        "method": "POST",
        "path": "/api/login",
    },
    "register": {
        "method": "POST",
        "path": "/api/register",
    },
    "account": {
        "method": "POST",
        "path": "/api/account",
    },
    "new": {
        "method": "POST",
        "path": "/api/new",
    },
    "count": {
        "method": "POST",
        "path": "/api/count",
    },
    "update": {
        "method": "POST",
        "path": "/api/update",
    },
    "delete": {
        "method": "POST",
        "path": "/api/delete",
    },
}
