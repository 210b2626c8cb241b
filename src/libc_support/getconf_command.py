# libc_support/getconf_command.py
import os

from . import confvars, events
from .errors import LibcSupportError, MissingArgument, PathError, UnknownVariable, UsageError
from .state import g


# meta: modules=cli,getconf callers=cli.getconf_main
def run_getconf_command():
    try:
        _run_getconf_command()
    except LibcSupportError as e:
        events.append_event(e.kind, e.context)
    except OSError as e:
        events.append_event("internal-error", {"reason": e.strerror or str(e)})
    return events.finish()


def _run_getconf_command():
    args = g["args"]

    if args.specification is not None:
        if args.specification not in confvars.SPECIFICATIONS:
            reason = f"unknown specification '{args.specification}'"
            raise UsageError(reason, reason=reason)
        g["specification"] = args.specification

    if args.all:
        if len(args.operands) > 1:
            raise MissingArgument("too many operands")
        path = args.operands[0] if args.operands else None
        _check_path(path)
        _print_all(path)
        return

    if len(args.operands) == 1:
        var = _find(args.operands[0])
        print(confvars.read_value(var))
        return

    if len(args.operands) == 2:
        name, path = args.operands
        var = _find(name)
        # only pathconf() variables depend on a path
        if var["method"] != confvars.PATHCONF:
            print(confvars.UNDEFINED)
            return
        _check_path(path)
        print(confvars.read_value(var, path))
        return

    raise MissingArgument("expected variable_name [pathname]")


def _find(name):
    var = confvars.find_variable(name)
    if var is None:
        raise UnknownVariable(name, name=name)
    return var


def _check_path(path):
    if path is None:
        return
    try:
        os.stat(path)
    except OSError as e:
        raise PathError(path, path=path, reason=e.strerror)


# meta: modules=getconf callers=_run_getconf_command
def _print_all(path):
    width = confvars.name_width()
    for var in confvars.VARIABLES:
        try:
            value = confvars.read_value(var, path)
        except OSError:
            # the path was already checked; one limit failing is not fatal
            value = confvars.UNDEFINED
        print(f"{var['name']:<{width}}\t{value}")
