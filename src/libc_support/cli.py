# libc_support/cli.py
import argparse

from . import __version__
from . import events, runtime, state
from .databases import establish_databases
from .errors import UsageError
from .getconf_command import run_getconf_command
from .getent_command import run_getent_command
from .state import g


class _Parser(argparse.ArgumentParser):
    """argparse, but a bad command line is a UsageError (exit 1, not 2)."""

    def error(self, message):
        raise UsageError(message, reason=message)


# meta: modules=cli callers=getconf_main
def parse_getconf(argv=None):
    g["parser"] = p = _Parser(
        prog=g["progname"],
        description="Print the value of a system configuration variable.",
        add_help=True,
    )
    p.add_argument("-v", "--version-specification", dest="specification", metavar="SPEC",
                   default=None, help="Compilation specification to report for.")
    p.add_argument("-a", "--all", action="store_true",
                   help="Display all applicable variables.")
    p.add_argument("-V", "--version", action="store_true",
                   help="Display program version and quit.")
    p.add_argument("operands", nargs="*", metavar="variable_name [pathname]",
                   help="Variable to print, and the path pathconf() variables refer to.")

    g["args"] = args = p.parse_args(argv)
    return args


# meta: modules=cli callers=getent_main
def parse_getent(argv=None):
    names = ", ".join(db["name"] for db in g["databases"])
    g["parser"] = p = _Parser(
        prog=g["progname"],
        description="Get entries from Name Service Switch libraries.",
        epilog=f"Supported databases:\n  {names}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True,
    )
    p.add_argument("-s", "--service", metavar="CONFIG", default=None,
                   help="Service configuration to be used, as 'service' or 'database:service'.")
    p.add_argument("-i", "--no-idn", dest="no_idn", action="store_true",
                   help="Disable IDN encoding for lookups.")
    p.add_argument("-V", "--version", action="store_true",
                   help="Display program version and quit.")
    p.add_argument("database", nargs="?", default=None, help="Database to query.")
    p.add_argument("keys", nargs="*", metavar="key", help="Keys to look up; enumerate when omitted.")

    g["args"] = args = p.parse_args(argv)
    return args


# meta: modules=cli callers=reflection
def get_version():
    return __version__

# meta: modules=cli callers=reflection
def usage_text():
    prog = g["progname"]
    if g["command"] == "getconf":
        return (f"Usage: {prog} [-v specification] variable_name [pathname]\n"
                f"       {prog} -a [pathname]")
    return f"Usage: {prog} [-i] [-s config] database [key ...]"


def _print_version():
    print(f"{g['progname']} version {__version__}")
    print("Part of the libc-support project")


# meta: modules=cli callers=pyproject.toml
def getconf_main(argv=None):
    state.reset("getconf")
    runtime.load_runtime_execution_data()
    g["command"] = "getconf"

    try:
        args = parse_getconf(argv)
    except UsageError as e:
        events.append_event(e.kind, e.context)
        return events.finish()

    if args.version:
        _print_version()
        return 0

    return run_getconf_command()


# meta: modules=cli callers=pyproject.toml
def getent_main(argv=None):
    state.reset("getent")
    runtime.load_runtime_execution_data()
    g["command"] = "getent"
    establish_databases()

    try:
        args = parse_getent(argv)
    except UsageError as e:
        events.append_event(e.kind, e.context)
        return events.finish()

    if args.version:
        _print_version()
        return 0

    return run_getent_command()
