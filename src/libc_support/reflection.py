# libc_support/reflection.py

# Names that event message templates may refer to.

registry = {
    "g-vars": {
        "progname": {"desc": "Program name used in diagnostics."},
        "command": {"desc": "Which tool is running: 'getconf' or 'getent'."},
        "specification": {"desc": "Compilation specification selected with -v (getconf)."},
        "database": {"desc": "Database named on the command line (getent)."}
    },
    "args": {
        "all": {"desc": "List every variable (getconf -a)."},
        "specification": {"desc": "Compilation specification (getconf -v)."},
        "operands": {"desc": "Variable name and optional path (getconf)."},
        "database": {"desc": "Database to query (getent)."},
        "keys": {"desc": "Keys to look up; enumerate when empty (getent)."},
        "service": {"desc": "NSS service configuration (getent -s)."},
        "no_idn": {"desc": "Disable IDN encoding of host names (getent -i)."}
    },
    "named-functions": {
        "get_version": {
            "desc": "Retrieve the version of libc_support.",
            "fnpath": "libc_support.cli.get_version"
        },
        "usage": {
            "desc": "Usage synopsis of the running tool.",
            "fnpath": "libc_support.cli.usage_text"
        }
    }
}
