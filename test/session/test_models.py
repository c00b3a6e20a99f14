import json
import logging
from uuid import UUID, uuid4

import pytest
from cryptography.fernet import Fernet
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from session import PrivateCookieJar, SameSite, Session, SESSION_COOKIE_NAME


@pytest.fixture
def jar():
    return PrivateCookieJar({}, Fernet(Fernet.generate_key()))


def test_new_session_has_random_id_and_no_data():
    session = Session.new()
    assert isinstance(session.id, UUID)
    assert session.id.version == 4
    assert session.data == {}
    assert Session.new().id != session.id


def test_set_converts_to_text():
    session = Session.new()
    session.set("count", 3)
    session.set(7, True)
    assert session.data == {"count": "3", "7": "True"}


def test_set_same_value_twice_is_idempotent():
    session = Session.new()
    session.set("user", "alice")
    before = dict(session.data)
    session.set("user", "alice")
    assert session.data == before


def test_set_overwrites_only_that_key():
    session = Session.new()
    session.set("user", "alice")
    session.set("theme", "dark")
    session.set("user", "bob")
    assert session.data == {"user": "bob", "theme": "dark"}


def test_read_access():
    session = Session.new()
    session.set("user", "alice")
    assert session["user"] == "alice"
    assert session.get("user") == "alice"
    assert session.get("missing") is None
    assert session.get("missing", "x") == "x"
    assert "user" in session
    assert "missing" not in session
    with pytest.raises(KeyError):
        session["missing"]


def test_cookie_value_is_compact_json(jar):
    session = Session.new(jar)
    session.set("user", "alice")
    payload = json.loads(session.to_cookie_value())
    assert payload == {"id": str(session.id), "data": {"user": "alice"}}
    assert " " not in session.to_cookie_value()


def test_cookie_value_round_trip():
    session = Session.new()
    session.set("user", "alice")
    session.set("empty", "")
    restored = Session.from_cookie_value(session.to_cookie_value())
    assert restored.id == session.id
    assert restored.data == session.data
    assert not restored.is_attached


@pytest.mark.parametrize("payload", [
    "",
    "not json",
    '{"id": "abc", "data": {}}',
    '{"data": {"user": "alice"}}',
    '{"id": "%s"}' % uuid4(),
    '{"id": "%s", "data": {"user": 5}}' % uuid4(),
    '{"id": "%s", "data": ["user"]}' % uuid4(),
    '["%s", {}]' % uuid4(),
])
def test_malformed_cookie_value_is_rejected(payload):
    with pytest.raises(ValidationError):
        Session.from_cookie_value(payload)


def test_unknown_fields_are_ignored():
    session_id = uuid4()
    session = Session.from_cookie_value(json.dumps({"id": str(session_id), "data": {}, "extra": 1}))
    assert session.id == session_id


def test_write_back_queues_private_cookie(jar):
    session = Session.new(jar)
    session.set("user", "alice")
    session.write_back()

    cookie = jar.pending[SESSION_COOKIE_NAME]
    assert cookie.secure is True
    assert cookie.http_only is True
    assert cookie.same_site is SameSite.LAX
    assert cookie.path == "/"
    assert json.loads(cookie.value) == {"id": str(session.id), "data": {"user": "alice"}}


def test_write_back_happens_once(jar):
    session = Session.new(jar)
    session.write_back()
    assert not session.is_attached

    session.set("late", "change")
    session.write_back()
    assert json.loads(jar.pending[SESSION_COOKIE_NAME].value)["data"] == {}


def test_write_back_without_jar_does_nothing():
    Session.new().write_back()


def test_non_string_value_fails_serialization():
    session = Session.new()
    session.data["visits"] = 3
    with pytest.raises(PydanticSerializationError):
        session.to_cookie_value()


def test_write_back_skips_unreadable_session(jar, caplog):
    session = Session.new(jar)
    session.set("user", "alice")
    session.data["visits"] = 3

    with caplog.at_level(logging.ERROR, logger="session_guard.session.models"):
        session.write_back()

    assert jar.pending == {}
    assert not session.is_attached
    assert "Could not serialize session" in caplog.text


def test_session_id_is_immutable():
    session = Session.new()
    with pytest.raises(ValidationError):
        session.id = uuid4()
