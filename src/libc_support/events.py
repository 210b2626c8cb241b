"""
libc_support.events  -- structured execution events

All diagnostics and significant outcomes are modeled as events emitted
from a controlled vocabulary (event_kinds.json).

event_kinds.json:
  src/libc_support/catalog/event_kinds.json
"""

import importlib
import re

from . import state, runtime, reflection
from .io_utils import stderr, stdout


# ============================================================
# TOKEN RESOLUTION
# ============================================================

TOKEN_RE = re.compile(r"""
    (\{g:([a-zA-Z_][a-zA-Z0-9_]*)\})     |  # {g:name}
    (\{args:([a-zA-Z_][a-zA-Z0-9_]*)\})  |  # {args:attr}
    (\{fn:([a-zA-Z_][a-zA-Z0-9_]*)\})    |  # {fn:name}
    (\{ctx:([a-zA-Z_][a-zA-Z0-9_]*)\})      # {ctx:key}
""", re.VERBOSE)

def _load_named_function(path):
    mod, _, name = path.rpartition(".")
    m = importlib.import_module(mod)
    return getattr(m, name)


def _resolve_tokens(s, context):
    if not s:
        return s

    out = []
    pos = 0

    for m in TOKEN_RE.finditer(s):
        start, end = m.span()

        # literal text before token
        if start > pos:
            out.append(s[pos:start])

        if m.group(2):  # g-var
            name = m.group(2)
            val = state.g.get(name)
            out.append("" if val is None else str(val))

        elif m.group(4):  # args attribute
            name = m.group(4)
            args = state.g.get("args")
            val = getattr(args, name, None) if args else None
            out.append("" if val is None else str(val))

        elif m.group(6):  # named function
            name = m.group(6)
            spec = reflection.registry["named-functions"][name]
            fn = _load_named_function(spec["fnpath"])
            out.append(str(fn()))

        elif m.group(8):  # ctx value
            name = m.group(8)
            val = context.get(name) if context else None
            out.append("" if val is None else str(val))

        pos = end

    # trailing literal text
    if pos < len(s):
        out.append(s[pos:])

    return "".join(out)


def _resolve_data(obj, context):
    """
    Walk data-template and resolve tokens in strings.
    """

    if isinstance(obj, str):
        return _resolve_tokens(obj, context)

    if isinstance(obj, list):
        return [_resolve_data(x, context) for x in obj]

    if isinstance(obj, dict):
        return {k: _resolve_data(v, context) for k, v in obj.items()}

    return obj


# ============================================================
# EVENT EMISSION
# ============================================================

# meta: #events-1 systems=events roles=submission callers=*
def append_event(kind, context=None):
    """
    Record an event of the given kind using its catalog definition.
    """

    if context is None:
        context = {}

    if kind not in runtime.EVENT_KINDS:
        raise KeyError(f"Unknown event kind: {kind}")

    spec = runtime.EVENT_KINDS[kind]

    evt = {
        "level": spec["level"],
        "kind": kind,
        "err": spec["err"],
        "stream": spec["stream"],
        "msg": _resolve_tokens(spec["msg-template"], context),
        "data": _resolve_data(spec["data-template"], context),
    }

    state.events.append(evt)
    return evt


# ============================================================
# PROGRAM ERROR CODE CALCULATION
# ============================================================

# meta: #events-2 systems=cli,events.examination roles=calculate callers=getconf_command,getent_command
def calculate_errcode():
    """
    Compute exit code from recorded events.

    Exit codes (contract):
      0 = Success
      1 = Usage error, unknown variable or database, bad path, bad
          service configuration, internal error
      2 = One or more keys not found
      3 = Enumeration not supported for this database
    """

    has_fatal = False
    has_noenum = False
    has_notfound = False

    for e in state.events:
        if e["err"] in ("usage", "unknown", "io", "config", "internal"):
            has_fatal = True
        elif e["err"] == "noenum":
            has_noenum = True
        elif e["err"] == "notfound":
            has_notfound = True

    if has_fatal:
        return 1
    if has_noenum:
        return 3
    if has_notfound:
        return 2
    return 0


# ============================================================
# PRESENTATION
# ============================================================

# meta: #events-3 systems=cli,events.examination roles=output callers=getconf_command,getent_command
def present_events():
    """
    Write every recorded event that has a stream to that stream.

    Events without a stream (key-not-found) stay silent; they only
    count toward the exit code.
    """

    for e in state.events:
        if e["stream"] == "stdout":
            stdout(e["msg"])
        elif e["stream"] == "stderr":
            stderr(e["msg"])


# meta: #events-4 systems=cli roles=output callers=cli,getconf_command,getent_command
def finish():
    """Present recorded events and return the process exit code."""
    present_events()
    return calculate_errcode()
