# libc_support/state.py

# Global control state, one invocation at a time.

# meta: #g_parser modules=state @g_parser writers=cli.parse_getconf,cli.parse_getent readers=cli
# meta: #g_args modules=state @g_args writers=cli readers=*
# meta: #g_progname modules=state @g_progname writers=cli readers=events
# meta: #g_command modules=state @g_command writers=cli readers=*
# meta: #g_specification modules=state @g_specification writers=getconf_command readers=*
# meta: #g_databases modules=state @g_databases writers=databases.establish_databases readers=databases
# meta: #g_database modules=state @g_database writers=getent_command readers=*
g = {
    "parser": None,
    "args": None,
    "progname": None,
    "command": None,

    "specification": None,

    "databases": None,
    "database": None,
}


# meta: #events modules=state writers=events.append_event readers=events
events = []


# meta: modules=state callers=cli.getconf_main,cli.getent_main
def reset(progname):
    for k in g:
        g[k] = None
    g["progname"] = progname
    events[:] = []
