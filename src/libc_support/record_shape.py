# libc_support/record_shape.py
"""
Text layout of every getent record.

Column widths and separators are fixed; scripts parse this output.
"""

import ctypes
import socket
import struct


ADDR_ALIGN_TO = 16
ALIAS_ALIGN_TO = 16
NETWORK_ALIGN_TO = 23
PROTO_ALIGN_TO = 23
RPC_ALIGN_TO = 17
INITGROUP_ALIGN_TO = 23
NETGROUP_ALIGN_TO = 23

ULONG_MAX = (1 << (8 * ctypes.sizeof(ctypes.c_ulong))) - 1

# bits/socket_type.h
SOCKTYPES = {
    1: "STREAM",
    2: "DGRAM",
    3: "RAW",
    4: "RDM",
    5: "SEQPACKET",
    6: "DCCP",
    10: "PACKET",
}


# meta: modules=record_shape callers=*
def pad(text, align_to):
    """Left-align text in a column of align_to - 1 characters; never truncates."""
    return text + " " * max(0, align_to - 1 - len(text))


def _aliases(names):
    return "".join(f" {n}" for n in names)


def _opt(value):
    return "" if value is None else value


# ============================================================
# colon-delimited databases
# ============================================================

# meta: modules=record_shape callers=databases
def format_passwd(pw):
    return (f"{pw['name']}:{pw['passwd']}:{pw['uid']}:{pw['gid']}:"
            f"{_opt(pw['gecos'])}:{_opt(pw['dir'])}:{_opt(pw['shell'])}")

# meta: modules=record_shape callers=databases
def format_group(gr):
    return f"{gr['name']}:{gr['passwd']}:{gr['gid']}:{','.join(gr['members'])}"

# meta: modules=record_shape callers=databases
def format_shadow(sp):
    """
    name:passwd:lstchg:min:max:warn:inact:expire:flag

    lstchg is always printed; the remaining day counts are left empty
    when negative, and flag is left empty when it is ULONG_MAX.
    """
    fields = [sp["name"], sp["passwd"], str(sp["lstchg"])]
    for k in ("min", "max", "warn", "inact", "expire"):
        fields.append(str(sp[k]) if sp[k] >= 0 else "")
    fields.append("" if sp["flag"] == ULONG_MAX else str(sp["flag"]))
    return ":".join(fields)

# meta: modules=record_shape callers=databases
def format_gshadow(sg):
    return f"{sg['name']}:{sg['passwd']}:{','.join(sg['admins'])}:{','.join(sg['members'])}"


# ============================================================
# hosts
# ============================================================

# meta: modules=record_shape callers=databases
def format_hostent(h):
    address = ""
    if h["addresses"]:
        address = socket.inet_ntop(h["addrtype"], h["addresses"][0])
    return pad(address, ADDR_ALIGN_TO) + f" {h['name']}" + _aliases(h["aliases"])

# meta: modules=record_shape callers=databases
def format_addrinfo(info, socktype=0, host=None):
    """
    One resolved address: the address, the socket type name when
    socktype is given, and the host name when host is given.
    """
    line = pad(info["address"] + " ", ADDR_ALIGN_TO)
    if socktype in SOCKTYPES:
        line += SOCKTYPES[socktype]
    if host is not None:
        line += f" {host}"
    return line


# ============================================================
# space-aligned databases
# ============================================================

# meta: modules=record_shape callers=databases
def format_network(n):
    dotted = socket.inet_ntoa(struct.pack("!I", n["net"]))
    return pad(n["name"] + " ", NETWORK_ALIGN_TO) + dotted + _aliases(n["aliases"])

# meta: modules=record_shape callers=databases
def format_protocol(p):
    return pad(p["name"] + " ", PROTO_ALIGN_TO) + str(p["proto"]) + _aliases(p["aliases"])

# meta: modules=record_shape callers=databases
def format_service(s):
    return pad(s["name"] + " ", PROTO_ALIGN_TO) + f"{s['port']}/{s['proto']}" + _aliases(s["aliases"])

# meta: modules=record_shape callers=databases
def format_rpc(r):
    line = pad(r["name"] + " ", RPC_ALIGN_TO) + str(r["number"])
    for i, alias in enumerate(r["aliases"]):
        line += ("  " if i == 0 else " ") + alias
    return line

# meta: modules=record_shape callers=databases
def format_alias(a):
    return pad(a["name"] + ": ", ALIAS_ALIGN_TO) + _aliases(a["members"])

# meta: modules=record_shape callers=databases
def format_ether(e):
    return f"{e['address']} {e['hostname']}"

# meta: modules=record_shape callers=databases
def format_initgroups(ig):
    # trailing space after every gid; gid 0 is the lookup's base group, not a membership
    gids = "".join(f"{gid} " for gid in ig["groups"] if gid > 0)
    return pad(ig["user"] + " ", INITGROUP_ALIGN_TO) + gids


def _triple(t):
    host, user, domain = t
    return f"({_opt(host)},{_opt(user)},{_opt(domain)})"

# meta: modules=record_shape callers=databases
def format_netgroup(ng):
    return pad(ng["name"] + " ", NETGROUP_ALIGN_TO) + " ".join(_triple(t) for t in ng["triples"])

# meta: modules=record_shape callers=databases
def format_innetgr(m):
    return pad(m["name"] + " ", NETGROUP_ALIGN_TO) + _triple(m["triple"]) + f" = {m['result']}"
