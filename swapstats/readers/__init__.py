# stdlib
import sys

# project
from swapstats.readers.base import SwapAreaReader, SwapReader
from swapstats.readers.library import DarwinReader, KvmReader, LibraryReader
from swapstats.readers.linux import LinuxReader
from swapstats.readers.perfstat import PerfstatReader
from swapstats.readers.swapctl import NetBsdReader, OpenBsdReader, SolarisReader

# sys.platform prefix -> reader; anything else goes through psutil
PLATFORM_READERS = [
    ('linux', LinuxReader),
    ('sunos', SolarisReader),
    ('netbsd', NetBsdReader),
    ('openbsd', OpenBsdReader),
    ('darwin', DarwinReader),
    ('freebsd', KvmReader),
    ('dragonfly', KvmReader),
    ('aix', PerfstatReader),
]


def reader_class(platform=None):
    platform = platform or sys.platform
    for prefix, cls in PLATFORM_READERS:
        if platform.startswith(prefix):
            return cls
    return LibraryReader


# the one reader of this host, fixed for the lifetime of the process
PLATFORM_READER = reader_class()

__all__ = [
    'DarwinReader',
    'KvmReader',
    'LibraryReader',
    'LinuxReader',
    'NetBsdReader',
    'OpenBsdReader',
    'PLATFORM_READER',
    'PerfstatReader',
    'SolarisReader',
    'SwapAreaReader',
    'SwapReader',
    'reader_class',
]
