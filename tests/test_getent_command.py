import grp
import os
import pwd
import socket

import pytest

from libc_support import cli, databases, libc
from libc_support.state import g


def run(capsys, *argv):
    rc = cli.getent_main(list(argv))
    out, err = capsys.readouterr()
    return rc, out, err


@pytest.fixture
def me():
    return pwd.getpwuid(os.getuid())


def test_passwd_by_name(capsys, me):
    rc, out, _ = run(capsys, "passwd", me.pw_name)
    assert rc == 0
    assert out.startswith(f"{me.pw_name}:{me.pw_passwd}:{me.pw_uid}:{me.pw_gid}:")
    assert out.count("\n") == 1


def test_passwd_by_uid(capsys, me):
    rc, out, _ = run(capsys, "passwd", str(me.pw_uid))
    assert rc == 0
    assert out.split(":")[0] == me.pw_name


def test_password_is_passwd(capsys, me):
    assert run(capsys, "password", me.pw_name) == run(capsys, "passwd", me.pw_name)


def test_unknown_key_is_silent(capsys):
    rc, out, err = run(capsys, "passwd", "no-such-user-xyzzy")
    assert (rc, out, err) == (2, "", "")


def test_found_and_missing_keys(capsys, me):
    rc, out, _ = run(capsys, "passwd", "no-such-user-xyzzy", me.pw_name)
    assert rc == 2
    assert out.startswith(me.pw_name + ":")


def test_group_by_gid(capsys, me):
    gr = grp.getgrgid(me.pw_gid)
    rc, out, _ = run(capsys, "group", str(me.pw_gid))
    assert rc == 0
    assert out == f"{gr.gr_name}:{gr.gr_passwd}:{gr.gr_gid}:{','.join(gr.gr_mem)}\n"


def test_passwd_enumeration_lists_current_user(capsys, me):
    rc, out, _ = run(capsys, "passwd")
    assert rc == 0
    assert any(line.split(":")[0] == me.pw_name for line in out.splitlines())


def test_unknown_database(capsys):
    rc, out, err = run(capsys, "nosuchdb", "x")
    assert rc == 1
    assert out == ""
    assert err == "Unknown database: nosuchdb\n"


def test_no_database_prints_usage(capsys):
    rc, out, err = run(capsys)
    assert rc == 1
    assert out == ""
    assert err.startswith("Usage: getent")


def test_initgroups_cannot_enumerate(capsys):
    rc, out, _ = run(capsys, "initgroups")
    assert rc == 3
    assert out == "Enumeration not supported on initgroups\n"


def test_initgroups_for_current_user(capsys, me):
    rc, out, _ = run(capsys, "initgroups", me.pw_name)
    assert rc == 0
    assert out.startswith(me.pw_name + " ")
    gids = [int(x) for x in out.split()[1:]]
    assert all(gid > 0 for gid in gids)


def test_hosts_loopback(capsys):
    rc, out, _ = run(capsys, "hosts", "127.0.0.1")
    assert rc == 0
    assert out.startswith("127.0.0.1" + " " * 7)
    assert out.count("\n") == 1


def test_ahostsv4_loopback_names_socket_types(capsys):
    rc, out, _ = run(capsys, "ahostsv4", "127.0.0.1")
    assert rc == 0
    lines = out.splitlines()
    assert lines
    for line in lines:
        assert line.startswith("127.0.0.1" + " " * 6)
    assert "STREAM" in out


def test_service_without_nss_configure_warns(capsys, monkeypatch, me):
    monkeypatch.setitem(libc.HAVE, "nss_configure", False)
    rc, out, err = run(capsys, "-s", "files", "passwd", me.pw_name)
    assert rc == 0
    assert out.startswith(me.pw_name + ":")
    assert "-s files" in err


def test_empty_service_config_is_rejected(capsys):
    rc, out, err = run(capsys, "-s", ":", "passwd", "root")
    assert rc == 1
    assert out == ""
    assert err == "Service configuration ':' is not valid\n"


def test_refused_service_config(capsys, monkeypatch):
    monkeypatch.setitem(libc.HAVE, "nss_configure", True)
    monkeypatch.setattr(libc, "nss_configure_lookup", lambda db, service: False)
    rc, _, err = run(capsys, "-s", "passwd:bogus", "passwd", "root")
    assert rc == 1
    assert "passwd:bogus" in err


def test_dispatches_through_database_table(capsys, monkeypatch):
    calls = []

    def fake_establish(have=None):
        g["databases"] = [databases._db(
            "fake", lambda keys: calls.append(("get", keys)),
            lambda: calls.append(("enum",)), "fake")]
        return g["databases"]

    monkeypatch.setattr(cli, "establish_databases", fake_establish)
    assert run(capsys, "fake", "a", "b")[0] == 0
    assert run(capsys, "fake")[0] == 0
    assert calls == [("get", ["a", "b"]), ("enum",)]


def test_version(capsys):
    rc, out, _ = run(capsys, "--version")
    assert rc == 0
    assert out.startswith("getent version ")


def _resolve_like_libc(host, *args):
    # str hosts go through IDNA, which rejects empty and over-long labels
    if isinstance(host, str):
        host.encode("idna")
    raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")


@pytest.mark.skipif(not libc.HAVE["networks"], reason="C library lacks networks")
@pytest.mark.parametrize("key", ["a..b", "a" * 64, "caf\udce9"])
def test_malformed_network_key_is_not_found(capsys, monkeypatch, key):
    monkeypatch.setattr(libc, "getnetbyname", lambda name: None)
    monkeypatch.setattr(socket, "getaddrinfo", _resolve_like_libc)
    rc, out, err = run(capsys, "networks", key)
    assert (rc, out, err) == (2, "", "")
