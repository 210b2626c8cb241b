# libc_support/libc.py
"""
libc_support.libc  -- ctypes bindings to the C library's name services

Only what the standard library does not already expose lives here:
hostent/netent/protoent/servent/rpcent enumeration and lookup, aliases,
shadow and gshadow, ether addresses, netgroups, and NSS lookup
configuration. pwd, grp and socket cover the rest.

Every function is bound only if this C library exports it; HAVE records
which groups are complete. Records come back as plain dicts.
"""

import ctypes
import socket
from ctypes import (CDLL, POINTER, Structure, byref, c_char, c_char_p, c_int,
                    c_long, c_size_t, c_ubyte, c_uint32, c_ulong)
from ctypes.util import find_library


libc = CDLL(find_library("c"), use_errno=True)

c_char_pp = POINTER(c_char_p)


# ============================================================
# STRUCTURES (<netdb.h>, <aliases.h>, <shadow.h>, <gshadow.h>,
#             <netinet/ether.h>)
# ============================================================

class hostent(Structure):
    _fields_ = [
        ("h_name", c_char_p),
        ("h_aliases", c_char_pp),
        ("h_addrtype", c_int),
        ("h_length", c_int),
        ("h_addr_list", POINTER(POINTER(c_char))),
    ]

class netent(Structure):
    _fields_ = [
        ("n_name", c_char_p),
        ("n_aliases", c_char_pp),
        ("n_addrtype", c_int),
        ("n_net", c_uint32),
    ]

class protoent(Structure):
    _fields_ = [
        ("p_name", c_char_p),
        ("p_aliases", c_char_pp),
        ("p_proto", c_int),
    ]

class servent(Structure):
    _fields_ = [
        ("s_name", c_char_p),
        ("s_aliases", c_char_pp),
        ("s_port", c_int),
        ("s_proto", c_char_p),
    ]

class rpcent(Structure):
    _fields_ = [
        ("r_name", c_char_p),
        ("r_aliases", c_char_pp),
        ("r_number", c_int),
    ]

class aliasent(Structure):
    _fields_ = [
        ("alias_name", c_char_p),
        ("alias_members_len", c_size_t),
        ("alias_members", c_char_pp),
        ("alias_local", c_int),
    ]

class spwd(Structure):
    _fields_ = [
        ("sp_namp", c_char_p),
        ("sp_pwdp", c_char_p),
        ("sp_lstchg", c_long),
        ("sp_min", c_long),
        ("sp_max", c_long),
        ("sp_warn", c_long),
        ("sp_inact", c_long),
        ("sp_expire", c_long),
        ("sp_flag", c_ulong),
    ]

class sgrp(Structure):
    _fields_ = [
        ("sg_namp", c_char_p),
        ("sg_passwd", c_char_p),
        ("sg_adm", c_char_pp),
        ("sg_mem", c_char_pp),
    ]

class ether_addr(Structure):
    _fields_ = [
        ("ether_addr_octet", c_ubyte * 6),
    ]


# ============================================================
# BINDING
# ============================================================

def _bind(name, restype, *argtypes):
    try:
        fn = getattr(libc, name)
    except AttributeError:
        return None
    fn.restype = restype
    fn.argtypes = argtypes
    return fn


_sethostent = _bind("sethostent", None, c_int)
_gethostent = _bind("gethostent", POINTER(hostent))
_endhostent = _bind("endhostent", None)

_getnetbyname = _bind("getnetbyname", POINTER(netent), c_char_p)
_getnetbyaddr = _bind("getnetbyaddr", POINTER(netent), c_uint32, c_int)
_setnetent = _bind("setnetent", None, c_int)
_getnetent = _bind("getnetent", POINTER(netent))
_endnetent = _bind("endnetent", None)

_getprotobyname = _bind("getprotobyname", POINTER(protoent), c_char_p)
_getprotobynumber = _bind("getprotobynumber", POINTER(protoent), c_int)
_setprotoent = _bind("setprotoent", None, c_int)
_getprotoent = _bind("getprotoent", POINTER(protoent))
_endprotoent = _bind("endprotoent", None)

_getservbyname = _bind("getservbyname", POINTER(servent), c_char_p, c_char_p)
_getservbyport = _bind("getservbyport", POINTER(servent), c_int, c_char_p)
_setservent = _bind("setservent", None, c_int)
_getservent = _bind("getservent", POINTER(servent))
_endservent = _bind("endservent", None)

_getrpcbyname = _bind("getrpcbyname", POINTER(rpcent), c_char_p)
_getrpcbynumber = _bind("getrpcbynumber", POINTER(rpcent), c_int)
_setrpcent = _bind("setrpcent", None, c_int)
_getrpcent = _bind("getrpcent", POINTER(rpcent))
_endrpcent = _bind("endrpcent", None)

_getaliasbyname = _bind("getaliasbyname", POINTER(aliasent), c_char_p)
_setaliasent = _bind("setaliasent", None)
_getaliasent = _bind("getaliasent", POINTER(aliasent))
_endaliasent = _bind("endaliasent", None)

_getspnam = _bind("getspnam", POINTER(spwd), c_char_p)
_setspent = _bind("setspent", None)
_getspent = _bind("getspent", POINTER(spwd))
_endspent = _bind("endspent", None)

_getsgnam = _bind("getsgnam", POINTER(sgrp), c_char_p)
_setsgent = _bind("setsgent", None)
_getsgent = _bind("getsgent", POINTER(sgrp))
_endsgent = _bind("endsgent", None)

_ether_aton = _bind("ether_aton", POINTER(ether_addr), c_char_p)
_ether_ntoa = _bind("ether_ntoa", c_char_p, POINTER(ether_addr))
_ether_hostton = _bind("ether_hostton", c_int, c_char_p, POINTER(ether_addr))
_ether_ntohost = _bind("ether_ntohost", c_int, c_char_p, POINTER(ether_addr))

_setnetgrent = _bind("setnetgrent", c_int, c_char_p)
_getnetgrent = _bind("getnetgrent", c_int, POINTER(c_char_p), POINTER(c_char_p), POINTER(c_char_p))
_endnetgrent = _bind("endnetgrent", None)
_innetgr = _bind("innetgr", c_int, c_char_p, c_char_p, c_char_p, c_char_p)

_nss_configure_lookup = _bind("__nss_configure_lookup", c_int, c_char_p, c_char_p)


def _all_bound(*fns):
    return all(fn is not None for fn in fns)


# meta: #have modules=libc readers=databases.establish_databases,getent_command
HAVE = {
    "hosts": _all_bound(_sethostent, _gethostent, _endhostent),
    "networks": _all_bound(_getnetbyname, _getnetbyaddr, _setnetent, _getnetent, _endnetent),
    "protocols": _all_bound(_getprotobyname, _getprotobynumber, _setprotoent, _getprotoent, _endprotoent),
    "services": _all_bound(_getservbyname, _getservbyport, _setservent, _getservent, _endservent),
    "rpc": _all_bound(_getrpcbyname, _getrpcbynumber, _setrpcent, _getrpcent, _endrpcent),
    "aliases": _all_bound(_getaliasbyname, _setaliasent, _getaliasent, _endaliasent),
    "shadow": _all_bound(_getspnam, _setspent, _getspent, _endspent),
    "gshadow": _all_bound(_getsgnam, _setsgent, _getsgent, _endsgent),
    "ethers": _all_bound(_ether_aton, _ether_ntoa, _ether_hostton, _ether_ntohost),
    "netgroup": _all_bound(_setnetgrent, _getnetgrent, _endnetgrent, _innetgr),
    "nss_configure": _nss_configure_lookup is not None,
}


# ============================================================
# CONVERSION
# ============================================================

def _b(s):
    if s is None:
        return None
    return s.encode("utf-8", "surrogateescape")

def _s(b):
    if b is None:
        return None
    return b.decode("utf-8", "surrogateescape")

def _strlist(pp):
    out = []
    if not pp:
        return out
    i = 0
    while pp[i] is not None:
        out.append(_s(pp[i]))
        i += 1
    return out


def _hostent(h):
    addresses = []
    i = 0
    while h.h_addr_list and h.h_addr_list[i]:
        addresses.append(ctypes.string_at(h.h_addr_list[i], h.h_length))
        i += 1
    return {
        "name": _s(h.h_name),
        "aliases": _strlist(h.h_aliases),
        "addrtype": h.h_addrtype,
        "addresses": addresses,
    }

def _netent(n):
    return {
        "name": _s(n.n_name),
        "aliases": _strlist(n.n_aliases),
        "addrtype": n.n_addrtype,
        "net": n.n_net,
    }

def _protoent(p):
    return {
        "name": _s(p.p_name),
        "aliases": _strlist(p.p_aliases),
        "proto": p.p_proto,
    }

def _servent(s):
    return {
        "name": _s(s.s_name),
        "aliases": _strlist(s.s_aliases),
        # s_port is in network byte order
        "port": socket.ntohs(s.s_port & 0xFFFF),
        "proto": _s(s.s_proto),
    }

def _rpcent(r):
    return {
        "name": _s(r.r_name),
        "aliases": _strlist(r.r_aliases),
        "number": r.r_number,
    }

def _aliasent(a):
    return {
        "name": _s(a.alias_name),
        "members": [_s(a.alias_members[i]) for i in range(a.alias_members_len)],
        "local": bool(a.alias_local),
    }

def _spwd(sp):
    return {
        "name": _s(sp.sp_namp),
        "passwd": _s(sp.sp_pwdp),
        "lstchg": sp.sp_lstchg,
        "min": sp.sp_min,
        "max": sp.sp_max,
        "warn": sp.sp_warn,
        "inact": sp.sp_inact,
        "expire": sp.sp_expire,
        "flag": sp.sp_flag,
    }

def _sgrp(sg):
    return {
        "name": _s(sg.sg_namp),
        "passwd": _s(sg.sg_passwd),
        "admins": _strlist(sg.sg_adm),
        "members": _strlist(sg.sg_mem),
    }


def _one(ptr, conv):
    if not ptr:
        return None
    return conv(ptr.contents)

def _iterate(setfn, getfn, endfn, conv, *setargs):
    setfn(*setargs)
    try:
        while True:
            ptr = getfn()
            if not ptr:
                return
            yield conv(ptr.contents)
    finally:
        endfn()


# ============================================================
# LOOKUPS
# ============================================================

# meta: modules=libc callers=nss
def iter_hosts():
    return _iterate(_sethostent, _gethostent, _endhostent, _hostent, 1)


# meta: modules=libc callers=nss
def getnetbyname(name):
    return _one(_getnetbyname(_b(name)), _netent)

# meta: modules=libc callers=nss
def getnetbyaddr(net, family=socket.AF_INET):
    return _one(_getnetbyaddr(net, family), _netent)

# meta: modules=libc callers=nss
def iter_networks():
    return _iterate(_setnetent, _getnetent, _endnetent, _netent, 1)


# meta: modules=libc callers=nss
def getprotobyname(name):
    return _one(_getprotobyname(_b(name)), _protoent)

# meta: modules=libc callers=nss
def getprotobynumber(number):
    return _one(_getprotobynumber(number), _protoent)

# meta: modules=libc callers=nss
def iter_protocols():
    return _iterate(_setprotoent, _getprotoent, _endprotoent, _protoent, 1)


# meta: modules=libc callers=nss
def getservbyname(name, proto=None):
    return _one(_getservbyname(_b(name), _b(proto)), _servent)

# meta: modules=libc callers=nss
def getservbyport(port, proto=None):
    return _one(_getservbyport(socket.htons(port & 0xFFFF), _b(proto)), _servent)

# meta: modules=libc callers=nss
def iter_services():
    return _iterate(_setservent, _getservent, _endservent, _servent, 1)


# meta: modules=libc callers=nss
def getrpcbyname(name):
    return _one(_getrpcbyname(_b(name)), _rpcent)

# meta: modules=libc callers=nss
def getrpcbynumber(number):
    return _one(_getrpcbynumber(number), _rpcent)

# meta: modules=libc callers=nss
def iter_rpc():
    return _iterate(_setrpcent, _getrpcent, _endrpcent, _rpcent, 1)


# meta: modules=libc callers=nss
def getaliasbyname(name):
    return _one(_getaliasbyname(_b(name)), _aliasent)

# meta: modules=libc callers=nss
def iter_aliases():
    return _iterate(_setaliasent, _getaliasent, _endaliasent, _aliasent)


# meta: modules=libc callers=nss
def getspnam(name):
    return _one(_getspnam(_b(name)), _spwd)

# meta: modules=libc callers=nss
def iter_shadow():
    return _iterate(_setspent, _getspent, _endspent, _spwd)


# meta: modules=libc callers=nss
def getsgnam(name):
    return _one(_getsgnam(_b(name)), _sgrp)

# meta: modules=libc callers=nss
def iter_gshadow():
    return _iterate(_setsgent, _getsgent, _endsgent, _sgrp)


# meta: modules=libc callers=nss
def ether_lookup(key):
    """
    Resolve an ethers key, either an address or a host name.

    Returns (address_text, hostname), or None when either direction of
    the mapping is missing.
    """
    addr = ether_addr()
    parsed = _ether_aton(_b(key))
    if parsed:
        ctypes.memmove(byref(addr), parsed, ctypes.sizeof(ether_addr))
    elif _ether_hostton(_b(key), byref(addr)) != 0:
        return None

    text = _s(_ether_ntoa(byref(addr)))
    hostname = ctypes.create_string_buffer(1025)  # NI_MAXHOST
    if _ether_ntohost(hostname, byref(addr)) != 0:
        return None
    return text, _s(hostname.value)


# meta: modules=libc callers=nss
def netgroup_triples(group):
    """Every (host, user, domain) triple of a netgroup; None fields are wildcards."""
    triples = []
    if not _setnetgrent(_b(group)):
        _endnetgrent()
        return triples
    try:
        host, user, domain = c_char_p(), c_char_p(), c_char_p()
        while _getnetgrent(byref(host), byref(user), byref(domain)):
            triples.append((_s(host.value), _s(user.value), _s(domain.value)))
    finally:
        _endnetgrent()
    return triples

# meta: modules=libc callers=nss
def innetgr(group, host, user, domain):
    return _innetgr(_b(group), _b(host), _b(user), _b(domain))


# meta: modules=libc callers=getent_command
def nss_configure_lookup(database, service):
    """Point one NSS database at a service list; False if the C library refuses."""
    return _nss_configure_lookup(_b(database), _b(service)) == 0
