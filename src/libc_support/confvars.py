# libc_support/confvars.py
"""
The getconf variable table.

Every variable is resolved one of four ways:

    sysconf   os.sysconf(key), key from os.sysconf_names
    confstr   os.confstr(key), key from os.confstr_names
    pathconf  os.pathconf(path, key), key from os.pathconf_names
    define    a compile-time constant, printed as-is

A variable whose key this host does not know is still recognized; its
value is "undefined".
"""

import ctypes
import errno
import os


SYSCONF = "sysconf"
CONFSTR = "confstr"
PATHCONF = "pathconf"
DEFINE = "define"

UNDEFINED = "undefined"


def _sysconf(name, key):
    return {"name": name, "method": SYSCONF, "key": key}

def _confstr(name, key):
    return {"name": name, "method": CONFSTR, "key": key}

def _pathconf(name, key):
    return {"name": name, "method": PATHCONF, "key": key}

def _define(name, value):
    return {"name": name, "method": DEFINE, "key": value}


def _smax(ctype):
    return (1 << (8 * ctypes.sizeof(ctype) - 1)) - 1

def _smin(ctype):
    return -(1 << (8 * ctypes.sizeof(ctype) - 1))

def _umax(ctype):
    return (1 << (8 * ctypes.sizeof(ctype))) - 1


# meta: #variables modules=confvars readers=getconf_command
VARIABLES = (
    # limits.h and friends
    _define("CHAR_BIT", 8),
    _define("CHAR_MAX", _smax(ctypes.c_byte)),
    _define("CHAR_MIN", _smin(ctypes.c_byte)),
    _define("INT_MAX", _smax(ctypes.c_int)),
    _define("INT_MIN", _smin(ctypes.c_int)),
    _define("LONG_BIT", 8 * ctypes.sizeof(ctypes.c_long)),
    _define("LONG_MAX", _smax(ctypes.c_long)),
    _define("LONG_MIN", _smin(ctypes.c_long)),
    _define("MB_LEN_MAX", 16),
    _define("NZERO", 20),
    _define("SCHAR_MAX", _smax(ctypes.c_byte)),
    _define("SCHAR_MIN", _smin(ctypes.c_byte)),
    _define("SHRT_MAX", _smax(ctypes.c_short)),
    _define("SHRT_MIN", _smin(ctypes.c_short)),
    _define("SSIZE_MAX", _smax(ctypes.c_ssize_t)),
    _define("UCHAR_MAX", _umax(ctypes.c_ubyte)),
    _define("UINT_MAX", _umax(ctypes.c_uint)),
    _define("ULONG_MAX", _umax(ctypes.c_ulong)),
    _define("USHRT_MAX", _umax(ctypes.c_ushort)),
    _define("WORD_BIT", 8 * ctypes.sizeof(ctypes.c_int)),
    _define("NL_ARGMAX", 4096),
    _define("NL_LANGMAX", 2048),
    _define("NL_MSGMAX", _smax(ctypes.c_int)),
    _define("NL_NMAX", _smax(ctypes.c_int)),
    _define("NL_SETMAX", _smax(ctypes.c_int)),
    _define("NL_TEXTMAX", _smax(ctypes.c_int)),
    _define("_POSIX_ARG_MAX", 4096),
    _define("_POSIX_CHILD_MAX", 25),
    _define("_POSIX_HOST_NAME_MAX", 255),
    _define("_POSIX_LINK_MAX", 8),
    _define("_POSIX_LOGIN_NAME_MAX", 9),
    _define("_POSIX_MAX_CANON", 255),
    _define("_POSIX_MAX_INPUT", 255),
    _define("_POSIX_NAME_MAX", 14),
    _define("_POSIX_NGROUPS_MAX", 8),
    _define("_POSIX_OPEN_MAX", 20),
    _define("_POSIX_PATH_MAX", 256),
    _define("_POSIX_PIPE_BUF", 512),
    _define("_POSIX_SSIZE_MAX", 32767),
    _define("_POSIX_STREAM_MAX", 8),
    _define("_POSIX_SYMLINK_MAX", 255),
    _define("_POSIX_SYMLOOP_MAX", 8),
    _define("_POSIX_TTY_NAME_MAX", 9),
    _define("_POSIX_TZNAME_MAX", 6),
    _define("_POSIX2_BC_BASE_MAX", 99),
    _define("_POSIX2_BC_DIM_MAX", 2048),
    _define("_POSIX2_BC_SCALE_MAX", 99),
    _define("_POSIX2_BC_STRING_MAX", 1000),
    _define("_POSIX2_COLL_WEIGHTS_MAX", 2),
    _define("_POSIX2_EXPR_NEST_MAX", 32),
    _define("_POSIX2_LINE_MAX", 2048),
    _define("_POSIX2_RE_DUP_MAX", 255),

    # sysconf
    _sysconf("AIO_LISTIO_MAX", "SC_AIO_LISTIO_MAX"),
    _sysconf("AIO_MAX", "SC_AIO_MAX"),
    _sysconf("AIO_PRIO_DELTA_MAX", "SC_AIO_PRIO_DELTA_MAX"),
    _sysconf("ARG_MAX", "SC_ARG_MAX"),
    _sysconf("ATEXIT_MAX", "SC_ATEXIT_MAX"),
    _sysconf("BC_BASE_MAX", "SC_BC_BASE_MAX"),
    _sysconf("BC_DIM_MAX", "SC_BC_DIM_MAX"),
    _sysconf("BC_SCALE_MAX", "SC_BC_SCALE_MAX"),
    _sysconf("BC_STRING_MAX", "SC_BC_STRING_MAX"),
    _sysconf("CHILD_MAX", "SC_CHILD_MAX"),
    _sysconf("CLK_TCK", "SC_CLK_TCK"),
    _sysconf("COLL_WEIGHTS_MAX", "SC_COLL_WEIGHTS_MAX"),
    _sysconf("DELAYTIMER_MAX", "SC_DELAYTIMER_MAX"),
    _sysconf("EXPR_NEST_MAX", "SC_EXPR_NEST_MAX"),
    _sysconf("GETGR_R_SIZE_MAX", "SC_GETGR_R_SIZE_MAX"),
    _sysconf("GETPW_R_SIZE_MAX", "SC_GETPW_R_SIZE_MAX"),
    _sysconf("HOST_NAME_MAX", "SC_HOST_NAME_MAX"),
    _sysconf("IOV_MAX", "SC_IOV_MAX"),
    _sysconf("LINE_MAX", "SC_LINE_MAX"),
    _sysconf("LOGIN_NAME_MAX", "SC_LOGIN_NAME_MAX"),
    _sysconf("MQ_OPEN_MAX", "SC_MQ_OPEN_MAX"),
    _sysconf("MQ_PRIO_MAX", "SC_MQ_PRIO_MAX"),
    _sysconf("NGROUPS_MAX", "SC_NGROUPS_MAX"),
    _sysconf("OPEN_MAX", "SC_OPEN_MAX"),
    _sysconf("PAGESIZE", "SC_PAGESIZE"),
    _sysconf("PAGE_SIZE", "SC_PAGE_SIZE"),
    _sysconf("PTHREAD_DESTRUCTOR_ITERATIONS", "SC_THREAD_DESTRUCTOR_ITERATIONS"),
    _sysconf("PTHREAD_KEYS_MAX", "SC_THREAD_KEYS_MAX"),
    _sysconf("PTHREAD_STACK_MIN", "SC_THREAD_STACK_MIN"),
    _sysconf("PTHREAD_THREADS_MAX", "SC_THREAD_THREADS_MAX"),
    _sysconf("RE_DUP_MAX", "SC_RE_DUP_MAX"),
    _sysconf("RTSIG_MAX", "SC_RTSIG_MAX"),
    _sysconf("SEM_NSEMS_MAX", "SC_SEM_NSEMS_MAX"),
    _sysconf("SEM_VALUE_MAX", "SC_SEM_VALUE_MAX"),
    _sysconf("SIGQUEUE_MAX", "SC_SIGQUEUE_MAX"),
    _sysconf("STREAM_MAX", "SC_STREAM_MAX"),
    _sysconf("TIMER_MAX", "SC_TIMER_MAX"),
    _sysconf("TTY_NAME_MAX", "SC_TTY_NAME_MAX"),
    _sysconf("TZNAME_MAX", "SC_TZNAME_MAX"),
    _sysconf("_AVPHYS_PAGES", "SC_AVPHYS_PAGES"),
    _sysconf("_NPROCESSORS_CONF", "SC_NPROCESSORS_CONF"),
    _sysconf("_NPROCESSORS_ONLN", "SC_NPROCESSORS_ONLN"),
    _sysconf("_PHYS_PAGES", "SC_PHYS_PAGES"),
    _sysconf("_POSIX_ASYNCHRONOUS_IO", "SC_ASYNCHRONOUS_IO"),
    _sysconf("_POSIX_FSYNC", "SC_FSYNC"),
    _sysconf("_POSIX_JOB_CONTROL", "SC_JOB_CONTROL"),
    _sysconf("_POSIX_MAPPED_FILES", "SC_MAPPED_FILES"),
    _sysconf("_POSIX_MEMLOCK", "SC_MEMLOCK"),
    _sysconf("_POSIX_MEMLOCK_RANGE", "SC_MEMLOCK_RANGE"),
    _sysconf("_POSIX_MEMORY_PROTECTION", "SC_MEMORY_PROTECTION"),
    _sysconf("_POSIX_MESSAGE_PASSING", "SC_MESSAGE_PASSING"),
    _sysconf("_POSIX_PRIORITIZED_IO", "SC_PRIORITIZED_IO"),
    _sysconf("_POSIX_PRIORITY_SCHEDULING", "SC_PRIORITY_SCHEDULING"),
    _sysconf("_POSIX_REALTIME_SIGNALS", "SC_REALTIME_SIGNALS"),
    _sysconf("_POSIX_SAVED_IDS", "SC_SAVED_IDS"),
    _sysconf("_POSIX_SEMAPHORES", "SC_SEMAPHORES"),
    _sysconf("_POSIX_SHARED_MEMORY_OBJECTS", "SC_SHARED_MEMORY_OBJECTS"),
    _sysconf("_POSIX_SYNCHRONIZED_IO", "SC_SYNCHRONIZED_IO"),
    _sysconf("_POSIX_THREADS", "SC_THREADS"),
    _sysconf("_POSIX_THREAD_ATTR_STACKADDR", "SC_THREAD_ATTR_STACKADDR"),
    _sysconf("_POSIX_THREAD_ATTR_STACKSIZE", "SC_THREAD_ATTR_STACKSIZE"),
    _sysconf("_POSIX_THREAD_PRIORITY_SCHEDULING", "SC_THREAD_PRIORITY_SCHEDULING"),
    _sysconf("_POSIX_THREAD_PRIO_INHERIT", "SC_THREAD_PRIO_INHERIT"),
    _sysconf("_POSIX_THREAD_PRIO_PROTECT", "SC_THREAD_PRIO_PROTECT"),
    _sysconf("_POSIX_THREAD_PROCESS_SHARED", "SC_THREAD_PROCESS_SHARED"),
    _sysconf("_POSIX_THREAD_SAFE_FUNCTIONS", "SC_THREAD_SAFE_FUNCTIONS"),
    _sysconf("_POSIX_TIMERS", "SC_TIMERS"),
    _sysconf("_POSIX_VERSION", "SC_VERSION"),
    _sysconf("POSIX2_C_BIND", "SC_2_C_BIND"),
    _sysconf("POSIX2_C_DEV", "SC_2_C_DEV"),
    _sysconf("POSIX2_CHAR_TERM", "SC_2_CHAR_TERM"),
    _sysconf("POSIX2_FORT_DEV", "SC_2_FORT_DEV"),
    _sysconf("POSIX2_FORT_RUN", "SC_2_FORT_RUN"),
    _sysconf("POSIX2_LOCALEDEF", "SC_2_LOCALEDEF"),
    _sysconf("POSIX2_SW_DEV", "SC_2_SW_DEV"),
    _sysconf("POSIX2_UPE", "SC_2_UPE"),
    _sysconf("POSIX2_VERSION", "SC_2_VERSION"),
    _sysconf("_XOPEN_CRYPT", "SC_XOPEN_CRYPT"),
    _sysconf("_XOPEN_ENH_I18N", "SC_XOPEN_ENH_I18N"),
    _sysconf("_XOPEN_LEGACY", "SC_XOPEN_LEGACY"),
    _sysconf("_XOPEN_REALTIME", "SC_XOPEN_REALTIME"),
    _sysconf("_XOPEN_REALTIME_THREADS", "SC_XOPEN_REALTIME_THREADS"),
    _sysconf("_XOPEN_SHM", "SC_XOPEN_SHM"),
    _sysconf("_XOPEN_UNIX", "SC_XOPEN_UNIX"),
    _sysconf("_XOPEN_VERSION", "SC_XOPEN_VERSION"),
    _sysconf("_XOPEN_XCU_VERSION", "SC_XOPEN_XCU_VERSION"),
    _sysconf("_XOPEN_XPG2", "SC_XOPEN_XPG2"),
    _sysconf("_XOPEN_XPG3", "SC_XOPEN_XPG3"),
    _sysconf("_XOPEN_XPG4", "SC_XOPEN_XPG4"),

    # confstr
    _confstr("PATH", "CS_PATH"),
    _confstr("CS_PATH", "CS_PATH"),
    _confstr("GNU_LIBC_VERSION", "CS_GNU_LIBC_VERSION"),
    _confstr("GNU_LIBPTHREAD_VERSION", "CS_GNU_LIBPTHREAD_VERSION"),
    _confstr("LFS_CFLAGS", "CS_LFS_CFLAGS"),
    _confstr("LFS_LDFLAGS", "CS_LFS_LDFLAGS"),
    _confstr("LFS_LIBS", "CS_LFS_LIBS"),
    _confstr("LFS_LINTFLAGS", "CS_LFS_LINTFLAGS"),
    _confstr("LFS64_CFLAGS", "CS_LFS64_CFLAGS"),
    _confstr("LFS64_LDFLAGS", "CS_LFS64_LDFLAGS"),
    _confstr("LFS64_LIBS", "CS_LFS64_LIBS"),
    _confstr("LFS64_LINTFLAGS", "CS_LFS64_LINTFLAGS"),
    _confstr("XBS5_ILP32_OFF32_CFLAGS", "CS_XBS5_ILP32_OFF32_CFLAGS"),
    _confstr("XBS5_ILP32_OFF32_LDFLAGS", "CS_XBS5_ILP32_OFF32_LDFLAGS"),
    _confstr("XBS5_ILP32_OFF32_LIBS", "CS_XBS5_ILP32_OFF32_LIBS"),
    _confstr("XBS5_ILP32_OFF32_LINTFLAGS", "CS_XBS5_ILP32_OFF32_LINTFLAGS"),
    _confstr("XBS5_ILP32_OFFBIG_CFLAGS", "CS_XBS5_ILP32_OFFBIG_CFLAGS"),
    _confstr("XBS5_ILP32_OFFBIG_LDFLAGS", "CS_XBS5_ILP32_OFFBIG_LDFLAGS"),
    _confstr("XBS5_ILP32_OFFBIG_LIBS", "CS_XBS5_ILP32_OFFBIG_LIBS"),
    _confstr("XBS5_ILP32_OFFBIG_LINTFLAGS", "CS_XBS5_ILP32_OFFBIG_LINTFLAGS"),
    _confstr("XBS5_LP64_OFF64_CFLAGS", "CS_XBS5_LP64_OFF64_CFLAGS"),
    _confstr("XBS5_LP64_OFF64_LDFLAGS", "CS_XBS5_LP64_OFF64_LDFLAGS"),
    _confstr("XBS5_LP64_OFF64_LIBS", "CS_XBS5_LP64_OFF64_LIBS"),
    _confstr("XBS5_LP64_OFF64_LINTFLAGS", "CS_XBS5_LP64_OFF64_LINTFLAGS"),
    _confstr("XBS5_LPBIG_OFFBIG_CFLAGS", "CS_XBS5_LPBIG_OFFBIG_CFLAGS"),
    _confstr("XBS5_LPBIG_OFFBIG_LDFLAGS", "CS_XBS5_LPBIG_OFFBIG_LDFLAGS"),
    _confstr("XBS5_LPBIG_OFFBIG_LIBS", "CS_XBS5_LPBIG_OFFBIG_LIBS"),
    _confstr("XBS5_LPBIG_OFFBIG_LINTFLAGS", "CS_XBS5_LPBIG_OFFBIG_LINTFLAGS"),

    # pathconf
    _pathconf("FILESIZEBITS", "PC_FILESIZEBITS"),
    _pathconf("LINK_MAX", "PC_LINK_MAX"),
    _pathconf("MAX_CANON", "PC_MAX_CANON"),
    _pathconf("MAX_INPUT", "PC_MAX_INPUT"),
    _pathconf("NAME_MAX", "PC_NAME_MAX"),
    _pathconf("PATH_MAX", "PC_PATH_MAX"),
    _pathconf("PIPE_BUF", "PC_PIPE_BUF"),
    _pathconf("POSIX_ALLOC_SIZE_MIN", "PC_ALLOC_SIZE_MIN"),
    _pathconf("POSIX_REC_INCR_XFER_SIZE", "PC_REC_INCR_XFER_SIZE"),
    _pathconf("POSIX_REC_MAX_XFER_SIZE", "PC_REC_MAX_XFER_SIZE"),
    _pathconf("POSIX_REC_MIN_XFER_SIZE", "PC_REC_MIN_XFER_SIZE"),
    _pathconf("POSIX_REC_XFER_ALIGN", "PC_REC_XFER_ALIGN"),
    _pathconf("SYMLINK_MAX", "PC_SYMLINK_MAX"),
    _pathconf("_POSIX_ASYNC_IO", "PC_ASYNC_IO"),
    _pathconf("_POSIX_CHOWN_RESTRICTED", "PC_CHOWN_RESTRICTED"),
    _pathconf("_POSIX_NO_TRUNC", "PC_NO_TRUNC"),
    _pathconf("_POSIX_PRIO_IO", "PC_PRIO_IO"),
    _pathconf("_POSIX_SYNC_IO", "PC_SYNC_IO"),
    _pathconf("_POSIX_VDISABLE", "PC_VDISABLE"),
    _pathconf("POSIX2_SYMLINKS", "PC_2_SYMLINKS"),
)


# meta: modules=confvars readers=getconf_command
SPECIFICATIONS = (
    "POSIX_V7_ILP32_OFF32",
    "POSIX_V7_ILP32_OFFBIG",
    "POSIX_V7_LP64_OFF64",
    "POSIX_V7_LPBIG_OFFBIG",
    "POSIX_V6_ILP32_OFF32",
    "POSIX_V6_ILP32_OFFBIG",
    "POSIX_V6_LP64_OFF64",
    "POSIX_V6_LPBIG_OFFBIG",
    "XBS5_ILP32_OFF32",
    "XBS5_ILP32_OFFBIG",
    "XBS5_LP64_OFF64",
    "XBS5_LPBIG_OFFBIG",
)


# meta: modules=confvars callers=getconf_command
def find_variable(name):
    for var in VARIABLES:
        if var["name"] == name:
            return var
    return None

# meta: modules=confvars callers=getconf_command
def name_width():
    return max(len(var["name"]) for var in VARIABLES)


# meta: modules=confvars callers=getconf_command
def read_value(var, path=None):
    """
    Look up one variable and render its value as printed by getconf.

    A value the system reports as absent (or a key this host has never
    heard of) renders as "undefined". OSErrors from pathconf other than
    EINVAL propagate; they mean the path itself is unusable.
    """
    method = var["method"]
    key = var["key"]

    if method == DEFINE:
        return str(key)

    if method == SYSCONF:
        if key not in os.sysconf_names:
            return UNDEFINED
        try:
            value = os.sysconf(key)
        except OSError:
            return UNDEFINED
        return UNDEFINED if value == -1 else str(value)

    if method == CONFSTR:
        if key not in os.confstr_names:
            return UNDEFINED
        try:
            value = os.confstr(key)
        except OSError:
            return UNDEFINED
        return UNDEFINED if value is None else value

    if method == PATHCONF:
        if key not in os.pathconf_names:
            return UNDEFINED
        try:
            value = os.pathconf(path if path is not None else ".", key)
        except OSError as e:
            if e.errno == errno.EINVAL:
                return UNDEFINED
            raise
        return UNDEFINED if value == -1 else str(value)

    raise ValueError(f"bad lookup method: {method}")
