import socket

from libc_support import libc, nss


LOOPBACK_NET = {"name": "loopback", "aliases": [], "addrtype": socket.AF_INET, "net": 0x7F000000}


def test_getnetwork_by_name(monkeypatch):
    monkeypatch.setattr(libc, "getnetbyname", lambda name: LOOPBACK_NET)
    assert nss.getnetwork("loopback") is LOOPBACK_NET


def test_getnetwork_falls_back_to_address(monkeypatch):
    seen = []

    def resolve(host, port, family):
        seen.append((host, family))
        return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.0", 0))]

    monkeypatch.setattr(libc, "getnetbyname", lambda name: None)
    monkeypatch.setattr(socket, "getaddrinfo", resolve)
    monkeypatch.setattr(libc, "getnetbyaddr",
                        lambda net, family: LOOPBACK_NET if net == 0x7F000000 else None)

    assert nss.getnetwork("127.0.0.0") is LOOPBACK_NET
    assert seen == [(b"127.0.0.0", socket.AF_INET)]


def test_getnetwork_unresolvable_is_none(monkeypatch):
    def resolve(host, port, family):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(libc, "getnetbyname", lambda name: None)
    monkeypatch.setattr(socket, "getaddrinfo", resolve)
    assert nss.getnetwork("no-such-network") is None


def test_getnetgroup_without_triples_is_none(monkeypatch):
    monkeypatch.setattr(libc, "netgroup_triples", lambda group: [])
    assert nss.getnetgroup("empty") is None


def test_getether_wraps_lookup(monkeypatch):
    monkeypatch.setattr(libc, "ether_lookup", lambda key: ("0:11:22:33:44:55", "box"))
    assert nss.getether("box") == {"address": "0:11:22:33:44:55", "hostname": "box"}
    monkeypatch.setattr(libc, "ether_lookup", lambda key: None)
    assert nss.getether("nobox") is None
