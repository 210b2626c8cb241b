# libc_support/errors.py

# Every error names the event kind it is reported as.

# meta: modules=errors callers=*
class LibcSupportError(Exception):
    kind = "internal-error"

    def __init__(self, msg="", **context):
        super().__init__(msg)
        self.context = context

# meta: modules=errors callers=*
class UsageError(LibcSupportError):
    kind = "bad-option"

# meta: modules=errors callers=*
class MissingArgument(UsageError):
    kind = "usage"

# meta: modules=errors callers=getconf_command
class UnknownVariable(LibcSupportError):
    kind = "unrecognized-variable"

# meta: modules=errors callers=getent_command
class UnknownDatabase(LibcSupportError):
    kind = "unknown-database"

# meta: modules=errors callers=databases
class EnumerationUnsupported(LibcSupportError):
    kind = "enumeration-unsupported"

# meta: modules=errors callers=getconf_command
class PathError(LibcSupportError):
    kind = "path-error"

# meta: modules=errors callers=getent_command
class ServiceConfigError(LibcSupportError):
    kind = "service-config-invalid"
