# stdlib
import ctypes
import ctypes.util
import os

# project
from swapstats.errors import InitializationError


def load_library(name, member=None):
    """
    Load a shared library through ctypes with errno tracking. `member` selects an archive
    member, as AIX ships its libraries as archives (e.g. libperfstat.a(shr_64.o)).
    """
    if member is not None:
        path = "lib%s.a(%s)" % (name, member)
    else:
        path = ctypes.util.find_library(name)
        # without a path, dlopen(NULL) returns the running process, which has libc loaded
        if path is None and name != 'c':
            raise InitializationError("Unable to find library %s" % name)

    try:
        return ctypes.CDLL(path, use_errno=True)
    except OSError as e:
        raise InitializationError("Unable to load library %s: %s" % (name, e))


def last_os_error(call):
    errno = ctypes.get_errno()
    return OSError(errno, "%s failed: %s" % (call, os.strerror(errno)))
