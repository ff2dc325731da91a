import pytest

from timetracker.models import TOKEN_SENTINEL
from timetracker.replies import (
    BAD_AUTH,
    SYNCED,
    UNKNOWN_RESPONSE,
    AccountInfo,
    ApiError,
    Authenticated,
    BadAuth,
    Malformed,
    Notice,
    SaveAck,
    TrackInfo,
    UnknownBehavior,
    Unrecognized,
    VersionInfo,
    apply_reply,
    parse_reply,
)
from timetracker.ui.state import AppState


@pytest.mark.parametrize(
    "body, expected",
    [
        ('{"error": "Login invalid."}', "Login invalid."),
        ('{"error": "Track not found.", "behavior": "SAVEACK"}', "Track not found."),
        ('{"error": "Username conflict.", "message": "ignored"}', "Username conflict."),
    ],
)
def test_error_field_is_a_failure_and_leaves_account_alone(body, expected):
    state = AppState()
    state.track_names = ["keep"]
    state.clock.session_seconds = 30

    reply = parse_reply(body)
    apply_reply(state, reply, now=50.0)

    assert isinstance(reply, ApiError)
    assert reply.ok is False
    assert state.last_message.ok is False
    assert state.last_message.text == expected
    assert not state.auth.is_authenticated
    assert state.track_names == ["keep"]
    assert state.clock.session_seconds == 30


def test_authentication_sets_token_and_uid():
    state = AppState()
    reply = parse_reply('{"behavior":"AUTHENTICATION","username":"alice","uid":7}')
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, Authenticated)
    assert state.auth.token == TOKEN_SENTINEL
    assert state.auth.uid == 7
    assert state.auth.username == "alice"
    assert state.last_message.ok is True
    assert state.last_message.text == ""


@pytest.mark.parametrize(
    "body",
    [
        '{"behavior":"AUTHENTICATION","uid":7}',
        '{"behavior":"AUTHENTICATION","name":"alice","uid":7}',
        '{"behavior":"AUTHENTICATION","username":"alice"}',
        '{"behavior":"AUTHENTICATION","username":"alice","uid":"seven"}',
    ],
)
def test_incomplete_authentication_is_bad_auth(body):
    state = AppState()
    reply = parse_reply(body)
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, BadAuth)
    assert state.last_message.text == BAD_AUTH
    assert state.last_message.ok is False
    assert not state.auth.is_authenticated


def test_save_ack_moves_session_into_saved():
    state = AppState()
    state.clock.saved_seconds = 100
    state.clock.session_seconds = 45

    reply = parse_reply('{"behavior":"SAVEACK"}')
    assert isinstance(reply, SaveAck)
    apply_reply(state, reply, now=1.0)
    assert state.clock.saved_seconds == 145
    assert state.clock.session_seconds == 0

    apply_reply(state, reply, now=2.0)
    assert state.clock.saved_seconds == 145
    assert state.clock.session_seconds == 0


def test_track_info_overwrites_saved_seconds():
    state = AppState()
    state.clock.saved_seconds = 9000

    reply = parse_reply('{"behavior":"TRACKINFO","seconds":120}')
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, TrackInfo)
    assert state.clock.saved_seconds == 120
    assert state.last_message.text == SYNCED


def test_track_info_without_seconds_keeps_saved():
    state = AppState()
    state.clock.saved_seconds = 10
    apply_reply(state, parse_reply('{"behavior":"TRACKINFO","message":"hm"}'), now=1.0)
    assert state.clock.saved_seconds == 10
    assert state.last_message.text == "hm"


def test_account_replaces_track_list():
    state = AppState()
    state.track_names = ["old"]
    reply = parse_reply(
        '{"behavior":"ACCOUNT","userId":7,"tracks":[{"track":"a","seconds":1},{"seconds":2},{"track":"b"}]}'
    )
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, AccountInfo)
    assert state.track_names == ["a", "b"]


def test_version_is_informational():
    state = AppState()
    reply = parse_reply('{"behavior":"VERSION","name":"server","version":"1.0.0","description":"d"}')
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, VersionInfo)
    assert reply.version == "1.0.0"
    assert state.last_message.text == ""
    assert not state.auth.is_authenticated


def test_plain_message_is_success():
    reply = parse_reply('{"message":"Added track!"}')
    assert isinstance(reply, Notice)
    assert reply.ok is True
    assert reply.message == "Added track!"


def test_unknown_behavior_uses_message():
    reply = parse_reply('{"behavior":"HEARTBEAT","message":"alive"}')
    assert isinstance(reply, UnknownBehavior)
    assert reply.ok is True
    assert reply.behavior == "HEARTBEAT"
    assert reply.message == "alive"


def test_unrecognized_shape_is_generic_failure():
    state = AppState()
    reply = parse_reply('{"status": 3}')
    apply_reply(state, reply, now=1.0)

    assert isinstance(reply, Unrecognized)
    assert state.last_message.ok is False
    assert state.last_message.text == UNKNOWN_RESPONSE


@pytest.mark.parametrize("body", ["<html>oops</html>", "", "[1, 2]", '"text"'])
def test_malformed_body_reports_parser_diagnostic(body):
    reply = parse_reply(body)
    assert isinstance(reply, Malformed)
    assert reply.ok is False
    assert reply.message
