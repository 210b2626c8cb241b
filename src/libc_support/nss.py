# libc_support/nss.py
"""
libc_support.nss  -- one lookup per database and key kind

Every lookup returns a record dict (or a list of them for address
lookups), or None when the key has no record. Enumerators yield record
dicts. pwd, grp, os and socket are used where they hand back the whole
record; libc covers the rest.
"""

import grp
import os
import pwd
import socket
import struct

from . import libc


# ============================================================
# passwd / group / initgroups
# ============================================================

def _passwd(pw):
    return {
        "name": pw.pw_name,
        "passwd": pw.pw_passwd,
        "uid": pw.pw_uid,
        "gid": pw.pw_gid,
        "gecos": pw.pw_gecos,
        "dir": pw.pw_dir,
        "shell": pw.pw_shell,
    }

def _group(gr):
    return {
        "name": gr.gr_name,
        "passwd": gr.gr_passwd,
        "gid": gr.gr_gid,
        "members": list(gr.gr_mem),
    }


# meta: modules=nss callers=databases
def getpwnam(name):
    try:
        return _passwd(pwd.getpwnam(name))
    except KeyError:
        return None

# meta: modules=nss callers=databases
def getpwuid(uid):
    try:
        return _passwd(pwd.getpwuid(uid))
    except (KeyError, OverflowError):
        return None

# meta: modules=nss callers=databases
def iter_passwd():
    for pw in pwd.getpwall():
        yield _passwd(pw)


# meta: modules=nss callers=databases
def getgrnam(name):
    try:
        return _group(grp.getgrnam(name))
    except KeyError:
        return None

# meta: modules=nss callers=databases
def getgrgid(gid):
    try:
        return _group(grp.getgrgid(gid))
    except (KeyError, OverflowError):
        return None

# meta: modules=nss callers=databases
def iter_group():
    for gr in grp.getgrall():
        yield _group(gr)


# meta: modules=nss callers=databases
def initgroups(user):
    """Group ids the user belongs to, as initgroups(3) would set them."""
    if getpwnam(user) is None:
        return None
    return {"user": user, "groups": os.getgrouplist(user, 0)}


# ============================================================
# hosts
# ============================================================

HOSTS = "hosts"
AHOSTS = "ahosts"
AHOSTS_V4 = "ahostsv4"
AHOSTS_V6 = "ahostsv6"


# meta: modules=nss callers=databases
def getaddrinfo(key, kind, idn=True):
    """
    Resolve a host for one of the hosts-family databases.

    Returns a list of {"family", "socktype", "address", "sockaddr"}
    dicts in resolver order, or None when the name does not resolve.
    With idn False the name is passed to the resolver as raw bytes.
    """
    family = socket.AF_UNSPEC
    flags = 0
    if kind == AHOSTS_V6:
        family = socket.AF_INET6
        flags = socket.AI_V4MAPPED
    elif kind == AHOSTS_V4:
        family = socket.AF_INET

    host = key if idn else key.encode("utf-8", "surrogateescape")
    try:
        infos = socket.getaddrinfo(host, None, family, 0, 0, flags)
    except (socket.gaierror, UnicodeError):
        return None
    if not infos:
        return None

    return [
        {"family": fam, "socktype": socktype, "address": sockaddr[0], "sockaddr": sockaddr}
        for fam, socktype, _proto, _canonname, sockaddr in infos
    ]

# meta: modules=nss callers=databases
def getnameinfo(info):
    """Host name for a resolved address; the numeric form when it has none."""
    try:
        host, _port = socket.getnameinfo(info["sockaddr"], 0)
    except (socket.gaierror, OSError):
        return info["address"]
    return host

# meta: modules=nss callers=databases
def iter_hosts():
    return libc.iter_hosts()


# ============================================================
# networks
# ============================================================

# meta: modules=nss callers=databases
def getnetwork(key):
    """Look a network up by name, falling back to its IPv4 address."""
    net = libc.getnetbyname(key)
    if net is not None:
        return net
    try:
        infos = socket.getaddrinfo(key.encode("utf-8", "surrogateescape"), None, socket.AF_INET)
    except (socket.gaierror, UnicodeError):
        return None
    if not infos:
        return None
    packed = socket.inet_aton(infos[0][4][0])
    return libc.getnetbyaddr(struct.unpack("!I", packed)[0], socket.AF_INET)

# meta: modules=nss callers=databases
def iter_networks():
    return libc.iter_networks()


# ============================================================
# protocols / rpc / services
# ============================================================

# meta: modules=nss callers=databases
def getprotobyname(name):
    return libc.getprotobyname(name)

# meta: modules=nss callers=databases
def getprotobynumber(number):
    return libc.getprotobynumber(number)

# meta: modules=nss callers=databases
def iter_protocols():
    return libc.iter_protocols()


# meta: modules=nss callers=databases
def getrpcbyname(name):
    return libc.getrpcbyname(name)

# meta: modules=nss callers=databases
def getrpcbynumber(number):
    return libc.getrpcbynumber(number)

# meta: modules=nss callers=databases
def iter_rpc():
    return libc.iter_rpc()


def _split_proto(key):
    # "smtp/tcp" -> ("smtp", "tcp")
    if "/" in key:
        name, proto = key.split("/", 1)
        return name, proto or None
    return key, None

# meta: modules=nss callers=databases
def getservbyname(key):
    name, proto = _split_proto(key)
    return libc.getservbyname(name, proto)

# meta: modules=nss callers=databases
def getservbyport(key):
    port, proto = _split_proto(key)
    return libc.getservbyport(int(port), proto)

# meta: modules=nss callers=databases
def iter_services():
    return libc.iter_services()


# ============================================================
# shadow / gshadow / aliases / ethers / netgroup
# ============================================================

# meta: modules=nss callers=databases
def getspnam(name):
    return libc.getspnam(name)

# meta: modules=nss callers=databases
def iter_shadow():
    return libc.iter_shadow()


# meta: modules=nss callers=databases
def getsgnam(name):
    return libc.getsgnam(name)

# meta: modules=nss callers=databases
def iter_gshadow():
    return libc.iter_gshadow()


# meta: modules=nss callers=databases
def getaliasbyname(name):
    return libc.getaliasbyname(name)

# meta: modules=nss callers=databases
def iter_aliases():
    return libc.iter_aliases()


# meta: modules=nss callers=databases
def getether(key):
    found = libc.ether_lookup(key)
    if found is None:
        return None
    address, hostname = found
    return {"address": address, "hostname": hostname}


# meta: modules=nss callers=databases
def getnetgroup(group):
    triples = libc.netgroup_triples(group)
    if not triples:
        return None
    return {"name": group, "triples": triples}

# meta: modules=nss callers=databases
def innetgr(group, host, user, domain):
    return {
        "name": group,
        "triple": (host, user, domain),
        "result": libc.innetgr(group, host, user, domain),
    }
