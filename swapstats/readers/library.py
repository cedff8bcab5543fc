"""
    Readers backed by psutil.swap_memory(), for platforms where the kernel only
    hands out one system-wide figure.
"""

# 3p
import psutil

# project
from swapstats.errors import InitializationError, SourceUnavailableError
from swapstats.readers.base import SwapReader
from swapstats.readings import SwapCollection, reading_from_parts


class LibraryReader(SwapReader):
    """
    Any other platform: psutil has the system-wide figures, already in bytes.
    """

    def collect(self):
        try:
            swap_mem = self._swap_memory()
        except (OSError, RuntimeError) as e:
            raise SourceUnavailableError("psutil.swap_memory() failed: %s" % e)

        reading = reading_from_parts(None, swap_mem.used, swap_mem.free)
        if reading is None:
            return SwapCollection(skipped=1)
        return SwapCollection([reading])

    def _swap_memory(self):
        return psutil.swap_memory()


class DarwinReader(LibraryReader):
    """
    macOS: psutil reads the vm.swapusage sysctl.
    """
    pass


class KvmReader(LibraryReader):
    """
    FreeBSD and DragonFly: psutil asks kvm_getswapinfo() for the grand total.
    The kernel interface is probed once, so a host without it never gets scheduled.
    """

    def initialize(self):
        try:
            self._swap_memory()
        except (OSError, RuntimeError) as e:
            raise InitializationError("Unable to query swap through kvm: %s" % e)
