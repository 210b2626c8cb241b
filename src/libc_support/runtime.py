"""libc_support.runtime  -- loads run-time execution data"""

import json
import importlib.resources as res


EVENT_KINDS = {}


# meta: #runtime-1 callers:cli.getconf_main,cli.getent_main
def load_runtime_execution_data():
    if not EVENT_KINDS:
        _load_event_kinds()

# meta: #runtime-2 callers:load_runtime_execution_data
def _load_event_kinds():
    """
    Load event_kinds.json from the libc_support package data.

    The file lives at:
        libc_support/catalog/event_kinds.json
    """

    pkg = "libc_support.catalog"
    filename = "event_kinds.json"

    try:
        with res.files(pkg).joinpath(filename).open("r", encoding="utf-8") as f:
            EVENT_KINDS.update(json.load(f))
    except FileNotFoundError:
        raise RuntimeError(f"Missing packaged resource: {pkg}/{filename}")
