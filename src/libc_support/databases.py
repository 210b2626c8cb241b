# libc_support/databases.py
"""
libc_support.databases  -- the getent database table

Each entry maps a database name to a getter, called with the keys from
the command line, and an enumerator, called when there are none. Both
print records as they are found. A key without a record is recorded as
a key-not-found event and the remaining keys are still looked up.
"""

from functools import partial

from . import events, libc, nss
from . import record_shape as shape
from .errors import EnumerationUnsupported
from .state import g


def _is_int(s):
    if not s:
        return False
    for ch in s:
        if ch < "0" or ch > "9":
            return False
    return True


def _not_found(key):
    events.append_event("key-not-found", {"database": g["database"], "key": key})


# ============================================================
# GETTERS
# ============================================================

def _get_simple(lookup, fmt, keys):
    for key in keys:
        rec = lookup(key)
        if rec is None:
            _not_found(key)
            continue
        print(fmt(rec))


def _get_numeric(by_name, by_number, fmt, keys):
    for key in keys:
        if _is_int(key):
            rec = by_number(int(key))
        else:
            rec = by_name(key)
        if rec is None:
            _not_found(key)
            continue
        print(fmt(rec))


def _get_services(keys):
    # "22", "22/tcp", "ssh", "ssh/tcp"
    for key in keys:
        if _is_int(key.split("/", 1)[0]):
            rec = nss.getservbyport(key)
        else:
            rec = nss.getservbyname(key)
        if rec is None:
            _not_found(key)
            continue
        print(shape.format_service(rec))


def _get_hosts(kind, keys):
    idn = not getattr(g["args"], "no_idn", False)
    for key in keys:
        infos = nss.getaddrinfo(key, kind, idn)
        if infos is None:
            _not_found(key)
            continue

        if kind == nss.HOSTS:
            info = infos[0]
            print(shape.format_addrinfo(info, host=nss.getnameinfo(info)))
            continue

        # only the first address of each key carries the host name
        for i, info in enumerate(infos):
            host = nss.getnameinfo(info) if i == 0 else None
            print(shape.format_addrinfo(info, info["socktype"], host))


def _get_netgroup(keys):
    """
    One key lists the netgroup's triples; four keys (netgroup host user
    domain) test membership. Anything else has no record.
    """
    if len(keys) == 1:
        rec = nss.getnetgroup(keys[0])
        if rec is None:
            _not_found(keys[0])
            return
        print(shape.format_netgroup(rec))
    elif len(keys) >= 4:
        print(shape.format_innetgr(nss.innetgr(*keys[:4])))
    else:
        _not_found(" ".join(keys))


# ============================================================
# ENUMERATORS
# ============================================================

def _enum_all(iterate, fmt):
    for rec in iterate():
        print(fmt(rec))


def _no_enum():
    raise EnumerationUnsupported(g["database"], database=g["database"])


if libc.HAVE["hosts"]:
    _enum_hosts = partial(_enum_all, nss.iter_hosts, shape.format_hostent)
else:
    _enum_hosts = _no_enum


# ============================================================
# TABLE
# ============================================================

def _db(name, get, enum_all, nss_name, requires=None):
    return {"name": name, "get": get, "enum_all": enum_all, "nss": nss_name, "requires": requires}


_get_passwd = partial(_get_numeric, nss.getpwnam, nss.getpwuid, shape.format_passwd)
_enum_passwd = partial(_enum_all, nss.iter_passwd, shape.format_passwd)

# meta: #databases modules=databases readers=establish_databases
DATABASES = (
    _db("ahosts", partial(_get_hosts, nss.AHOSTS), _enum_hosts, "hosts"),
    _db("ahostsv4", partial(_get_hosts, nss.AHOSTS_V4), _enum_hosts, "hosts"),
    _db("ahostsv6", partial(_get_hosts, nss.AHOSTS_V6), _enum_hosts, "hosts"),
    _db("hosts", partial(_get_hosts, nss.HOSTS), _enum_hosts, "hosts"),
    _db("aliases",
        partial(_get_simple, nss.getaliasbyname, shape.format_alias),
        partial(_enum_all, nss.iter_aliases, shape.format_alias),
        "aliases", requires="aliases"),
    _db("ethers",
        partial(_get_simple, nss.getether, shape.format_ether),
        _no_enum,
        "ethers", requires="ethers"),
    _db("group",
        partial(_get_numeric, nss.getgrnam, nss.getgrgid, shape.format_group),
        partial(_enum_all, nss.iter_group, shape.format_group),
        "group"),
    _db("gshadow",
        partial(_get_simple, nss.getsgnam, shape.format_gshadow),
        partial(_enum_all, nss.iter_gshadow, shape.format_gshadow),
        "gshadow", requires="gshadow"),
    _db("initgroups",
        partial(_get_simple, nss.initgroups, shape.format_initgroups),
        _no_enum,
        "initgroups"),
    _db("netgroup", _get_netgroup, _no_enum, "netgroup", requires="netgroup"),
    _db("networks",
        partial(_get_simple, nss.getnetwork, shape.format_network),
        partial(_enum_all, nss.iter_networks, shape.format_network),
        "networks", requires="networks"),
    _db("passwd", _get_passwd, _enum_passwd, "passwd"),
    _db("password", _get_passwd, _enum_passwd, "passwd"),
    _db("protocols",
        partial(_get_numeric, nss.getprotobyname, nss.getprotobynumber, shape.format_protocol),
        partial(_enum_all, nss.iter_protocols, shape.format_protocol),
        "protocols", requires="protocols"),
    _db("rpc",
        partial(_get_numeric, nss.getrpcbyname, nss.getrpcbynumber, shape.format_rpc),
        partial(_enum_all, nss.iter_rpc, shape.format_rpc),
        "rpc", requires="rpc"),
    _db("services",
        _get_services,
        partial(_enum_all, nss.iter_services, shape.format_service),
        "services", requires="services"),
    _db("shadow",
        partial(_get_simple, nss.getspnam, shape.format_shadow),
        partial(_enum_all, nss.iter_shadow, shape.format_shadow),
        "shadow", requires="shadow"),
)


# meta: modules=databases callers=cli.getent_main
def establish_databases(have=None):
    """Register the databases this C library can serve, in table order."""
    if have is None:
        have = libc.HAVE
    g["databases"] = [
        db for db in DATABASES
        if db["requires"] is None or have.get(db["requires"], False)
    ]
    return g["databases"]


# meta: modules=databases callers=getent_command
def find_database(name):
    for db in g["databases"]:
        if db["name"] == name:
            return db
    return None
