# libc_support/getent_command.py
from . import events, libc
from .databases import find_database
from .errors import LibcSupportError, MissingArgument, ServiceConfigError, UnknownDatabase
from .state import g


# meta: modules=cli,getent callers=cli.getent_main
def run_getent_command():
    try:
        _run_getent_command()
    except LibcSupportError as e:
        events.append_event(e.kind, e.context)
    except OSError as e:
        events.append_event("internal-error", {"reason": e.strerror or str(e)})
    return events.finish()


def _run_getent_command():
    args = g["args"]

    if args.database is None:
        raise MissingArgument("missing database")

    g["database"] = args.database
    db = find_database(args.database)
    if db is None:
        raise UnknownDatabase(args.database, database=args.database)

    if args.service is not None:
        _configure_service(args.service, db)

    if args.keys:
        db["get"](args.keys)
    else:
        db["enum_all"]()


# meta: modules=getent callers=_run_getent_command
def _configure_service(config, db):
    """
    -s service           applies to the queried database
    -s database:service  applies to the named database
    """
    if ":" in config:
        database, service = config.split(":", 1)
    else:
        database, service = db["nss"], config

    if not database or not service:
        raise ServiceConfigError(config, config=config)

    if not libc.HAVE["nss_configure"]:
        events.append_event("service-config-unsupported", {"config": config})
        return

    if not libc.nss_configure_lookup(database, service):
        raise ServiceConfigError(config, config=config)
