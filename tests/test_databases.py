from types import SimpleNamespace

import pytest

from libc_support import databases, nss, state
from libc_support.errors import EnumerationUnsupported
from libc_support.state import g


@pytest.fixture
def db_named():
    def _set(name):
        g["database"] = name
        g["args"] = SimpleNamespace(no_idn=False)
    return _set


def _notfound_keys():
    return [e["data"]["key"] for e in state.events if e["kind"] == "key-not-found"]


def test_databases_are_listed_alphabetically_after_the_hosts_family():
    names = [db["name"] for db in databases.DATABASES]
    assert names[:4] == ["ahosts", "ahostsv4", "ahostsv6", "hosts"]
    assert names[4:] == sorted(names[4:])


def test_establish_without_capabilities_keeps_stdlib_databases():
    names = [db["name"] for db in databases.establish_databases(have={})]
    assert names == ["ahosts", "ahostsv4", "ahostsv6", "hosts",
                     "group", "initgroups", "passwd", "password"]


def test_establish_with_every_capability():
    have = {db["requires"]: True for db in databases.DATABASES if db["requires"]}
    assert databases.establish_databases(have=have) == list(databases.DATABASES)
    assert g["databases"] == list(databases.DATABASES)


def test_find_database():
    databases.establish_databases(have={})
    assert databases.find_database("passwd")["nss"] == "passwd"
    assert databases.find_database("password")["nss"] == "passwd"
    assert databases.find_database("shadow") is None


def test_get_simple_prints_found_and_records_missing(capsys, db_named):
    db_named("demo")
    table = {"a": "first", "c": "third"}
    databases._get_simple(table.get, str.upper, ["a", "b", "c"])
    assert capsys.readouterr().out == "FIRST\nTHIRD\n"
    assert _notfound_keys() == ["b"]


def test_get_numeric_splits_names_from_numbers(capsys, db_named):
    db_named("demo")
    calls = []

    def by_name(k):
        calls.append(("name", k))
        return k

    def by_number(n):
        calls.append(("number", n))
        return None if n == 7 else str(n)

    databases._get_numeric(by_name, by_number, str, ["tcp", "6", "7", "-1"])
    assert calls == [("name", "tcp"), ("number", 6), ("number", 7), ("name", "-1")]
    assert capsys.readouterr().out == "tcp\n6\n-1\n"
    assert _notfound_keys() == ["7"]


def test_services_by_port_and_name(capsys, monkeypatch, db_named):
    db_named("services")
    rec = {"name": "ssh", "aliases": [], "port": 22, "proto": "tcp"}
    seen = []
    monkeypatch.setattr(nss, "getservbyport", lambda k: seen.append(("port", k)) or rec)
    monkeypatch.setattr(nss, "getservbyname", lambda k: seen.append(("name", k)) or None)

    databases._get_services(["22/tcp", "ssh"])
    assert seen == [("port", "22/tcp"), ("name", "ssh")]
    assert capsys.readouterr().out == "ssh" + " " * 19 + "22/tcp\n"
    assert _notfound_keys() == ["ssh"]


def _infos():
    return [
        {"family": 2, "socktype": 1, "address": "192.0.2.1", "sockaddr": ("192.0.2.1", 0)},
        {"family": 2, "socktype": 2, "address": "192.0.2.1", "sockaddr": ("192.0.2.1", 0)},
    ]


def test_hosts_prints_first_address_only(capsys, monkeypatch, db_named):
    db_named("hosts")
    monkeypatch.setattr(nss, "getaddrinfo", lambda key, kind, idn: _infos())
    monkeypatch.setattr(nss, "getnameinfo", lambda info: "example")

    databases._get_hosts(nss.HOSTS, ["example"])
    assert capsys.readouterr().out == "192.0.2.1" + " " * 7 + "example\n"


def test_ahosts_names_only_the_first_line(capsys, monkeypatch, db_named):
    db_named("ahosts")
    monkeypatch.setattr(nss, "getaddrinfo", lambda key, kind, idn: _infos())
    monkeypatch.setattr(nss, "getnameinfo", lambda info: "example")

    databases._get_hosts(nss.AHOSTS, ["example"])
    assert capsys.readouterr().out.splitlines() == [
        "192.0.2.1" + " " * 6 + "STREAM example",
        "192.0.2.1" + " " * 6 + "DGRAM",
    ]


def test_hosts_honours_no_idn(monkeypatch, db_named):
    db_named("hosts")
    g["args"] = SimpleNamespace(no_idn=True)
    seen = []
    monkeypatch.setattr(nss, "getaddrinfo", lambda key, kind, idn: seen.append(idn))

    databases._get_hosts(nss.HOSTS, ["bücher.example"])
    assert seen == [False]
    assert _notfound_keys() == ["bücher.example"]


def test_netgroup_listing_and_membership(capsys, monkeypatch, db_named):
    db_named("netgroup")
    monkeypatch.setattr(nss, "getnetgroup",
                        lambda name: {"name": name, "triples": [("h", None, None)]})
    monkeypatch.setattr(nss, "innetgr",
                        lambda *k: {"name": k[0], "triple": k[1:], "result": 0})

    databases._get_netgroup(["ng"])
    databases._get_netgroup(["ng", "h", "u", "d"])
    assert capsys.readouterr().out.splitlines() == [
        "ng" + " " * 20 + "(h,,)",
        "ng" + " " * 20 + "(h,u,d) = 0",
    ]


def test_netgroup_with_two_keys_has_no_record(capsys, db_named):
    db_named("netgroup")
    databases._get_netgroup(["ng", "h"])
    assert capsys.readouterr().out == ""
    assert _notfound_keys() == ["ng h"]


def test_enum_all_prints_every_record(capsys):
    databases._enum_all(lambda: iter([1, 2]), lambda n: f"rec {n}")
    assert capsys.readouterr().out == "rec 1\nrec 2\n"


def test_no_enum_raises(db_named):
    db_named("ethers")
    with pytest.raises(EnumerationUnsupported) as e:
        databases._no_enum()
    assert e.value.context == {"database": "ethers"}
