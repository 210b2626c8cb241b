import pytest

from libc_support import events, runtime, state
from libc_support.state import g


def test_catalog_is_loaded():
    assert "key-not-found" in runtime.EVENT_KINDS
    for spec in runtime.EVENT_KINDS.values():
        assert {"level", "err", "stream", "msg-template", "data-template"} <= set(spec)


def test_unknown_kind_is_rejected():
    with pytest.raises(KeyError):
        events.append_event("no-such-kind")


def test_context_and_state_tokens_are_resolved():
    g["progname"] = "getconf"
    evt = events.append_event("path-error", {"path": "/x", "reason": "No such file or directory"})
    assert evt["msg"] == "getconf: /x: No such file or directory"
    assert evt["data"] == {"path": "/x", "reason": "No such file or directory"}


def test_named_function_token():
    g["progname"] = "getent"
    g["command"] = "getent"
    evt = events.append_event("usage")
    assert evt["msg"] == "Usage: getent [-i] [-s config] database [key ...]"


def test_no_events_is_success():
    assert events.calculate_errcode() == 0


def test_not_found_exits_two():
    events.append_event("key-not-found", {"database": "passwd", "key": "x"})
    assert events.calculate_errcode() == 2


def test_enumeration_beats_not_found():
    events.append_event("key-not-found", {"database": "passwd", "key": "x"})
    events.append_event("enumeration-unsupported", {"database": "ethers"})
    assert events.calculate_errcode() == 3


def test_errors_beat_everything():
    events.append_event("enumeration-unsupported", {"database": "ethers"})
    events.append_event("unknown-database", {"database": "x"})
    assert events.calculate_errcode() == 1


def test_warning_does_not_change_exit_code():
    events.append_event("service-config-unsupported", {"config": "files"})
    assert events.calculate_errcode() == 0


def test_not_found_is_silent(capsys):
    events.append_event("key-not-found", {"database": "passwd", "key": "x"})
    assert events.finish() == 2
    assert capsys.readouterr() == ("", "")


def test_events_go_to_their_streams(capsys):
    events.append_event("enumeration-unsupported", {"database": "ethers"})
    events.append_event("unknown-database", {"database": "x"})
    events.present_events()
    out, err = capsys.readouterr()
    assert out == "Enumeration not supported on ethers\n"
    assert err == "Unknown database: x\n"


def test_reset_clears_events():
    events.append_event("unknown-database", {"database": "x"})
    state.reset("getent")
    assert state.events == []
    assert g["progname"] == "getent"
