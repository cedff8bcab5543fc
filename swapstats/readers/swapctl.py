"""
    swapctl(2) based readers for illumos/Solaris, OpenBSD and NetBSD.

    All of them first ask the kernel for the number of swap areas and then fetch
    a table with one entry per area.
"""

# stdlib
from collections import namedtuple
import ctypes

# project
from swapstats.errors import SourceUnavailableError
from swapstats.readers.base import SwapAreaReader
from swapstats.readers.native import last_os_error, load_library
from swapstats.readings import PagingActivity, SwapCollection

PATH_MAX = 1024

# sys/swap.h on illumos/Solaris
SC_LIST = 2
SC_GETNSWP = 4
ST_INDEL = 0x01

# sys/swap.h on OpenBSD and NetBSD
SWAP_NSWAP = 3
SWF_ENABLE = 0x02
DEV_BSIZE = 512

# uvmexp_sysctl on NetBSD: every field is an int64, pgswapin/pgswapout at these slots
CTL_VM = 2
VM_UVMEXP2 = 5
UVMEXP_PGSWAPIN = 33
UVMEXP_PGSWAPOUT = 34
UVMEXP_SLOTS = 128

SwapEntry = namedtuple('SwapEntry', ['path', 'pages', 'free', 'flags'])
BlockEntry = namedtuple('BlockEntry', ['path', 'blocks', 'inuse', 'flags'])


class SolarisSwapEnt(ctypes.Structure):
    _fields_ = [
        ('ste_path', ctypes.c_char_p),
        ('ste_start', ctypes.c_long),
        ('ste_length', ctypes.c_long),
        ('ste_pages', ctypes.c_long),
        ('ste_free', ctypes.c_long),
        ('ste_flags', ctypes.c_int),
    ]


def solaris_swaptable(count):
    class SwapTable(ctypes.Structure):
        _fields_ = [
            ('swt_n', ctypes.c_int),
            ('swt_ent', SolarisSwapEnt * count),
        ]
    return SwapTable


class OpenBsdSwapEnt(ctypes.Structure):
    _fields_ = [
        ('se_dev', ctypes.c_int32),
        ('se_flags', ctypes.c_int),
        ('se_nblks', ctypes.c_int),
        ('se_inuse', ctypes.c_int),
        ('se_priority', ctypes.c_int),
        ('se_path', ctypes.c_char * PATH_MAX),
    ]


class NetBsdSwapEnt(ctypes.Structure):
    _fields_ = [
        ('se_dev', ctypes.c_uint64),
        ('se_flags', ctypes.c_int),
        ('se_nblks', ctypes.c_int),
        ('se_inuse', ctypes.c_int),
        ('se_priority', ctypes.c_int),
        ('se_path', ctypes.c_char * (PATH_MAX + 1)),
    ]


def decode_path(raw):
    return raw.decode('utf-8', 'replace') if raw else None


class SolarisReader(SwapAreaReader):
    """
    Two-argument swapctl(): SC_GETNSWP for the count, SC_LIST for the table.
    Sizes are reported in pages.
    """

    def __init__(self, context, logger=None):
        super(SolarisReader, self).__init__(context, logger)
        self.libc = None

    def initialize(self):
        self.libc = load_library('c')

    def collect(self):
        count = self._swap_count()
        if count < 0:
            raise SourceUnavailableError("swapctl (SC_GETNSWP) failed with status %d" % count)
        if count == 0:
            return SwapCollection()

        status, entries = self._swap_list(count)
        if status > count:
            raise SourceUnavailableError(
                "Allocated memory for %d swap areas, but swapctl claims to have returned %d" % (count, status))

        # fewer areas than requested: only the first `status` entries are filled in
        return self._summarize(self._areas(entries[:status]))

    def _areas(self, entries):
        for entry in entries:
            if entry.flags & ST_INDEL:
                self.log.debug("Skipping swap area %s, it is being deleted", entry.path)
                continue
            total = entry.pages * self.page_size
            free = entry.free * self.page_size
            yield entry.path, total, total - free

    def _swap_count(self):
        return self.libc.swapctl(SC_GETNSWP, None)

    def _swap_list(self, count):
        table = solaris_swaptable(count)()
        paths = [ctypes.create_string_buffer(PATH_MAX) for _ in range(count)]
        for i, path in enumerate(paths):
            table.swt_ent[i].ste_path = ctypes.cast(path, ctypes.c_char_p)
        table.swt_n = count

        status = self.libc.swapctl(SC_LIST, ctypes.byref(table))
        if status < 0:
            raise SourceUnavailableError("swapctl (SC_LIST): %s" % last_os_error('swapctl'))

        entries = [
            SwapEntry(decode_path(paths[i].value), table.swt_ent[i].ste_pages,
                      table.swt_ent[i].ste_free, table.swt_ent[i].ste_flags)
            for i in range(min(status, count))
        ]
        return status, entries


class OpenBsdReader(SwapAreaReader):
    """
    Three-argument swapctl(): SWAP_NSWAP for the count, SWAP_STATS for the table.
    Sizes are reported in DEV_BSIZE blocks.
    """
    SWAP_STATS = 4
    swapent = OpenBsdSwapEnt

    def __init__(self, context, logger=None):
        super(OpenBsdReader, self).__init__(context, logger)
        self.libc = None

    def initialize(self):
        self.libc = load_library('c')

    def collect(self):
        count = self._swap_count()
        if count < 0:
            raise SourceUnavailableError("swapctl (SWAP_NSWAP) failed with status %d" % count)
        if count == 0:
            return SwapCollection()

        status, entries = self._swap_stats(count)
        if status != count:
            raise SourceUnavailableError("swapctl (SWAP_STATS) failed with status %d" % status)

        collection = self._summarize(self._areas(entries))
        if self.report_io:
            collection.paging = self._read_io()
        return collection

    def _areas(self, entries):
        for entry in entries:
            if not entry.flags & SWF_ENABLE:
                self.log.debug("Skipping swap area %s, it is not enabled", entry.path)
                continue
            yield entry.path, entry.blocks * DEV_BSIZE, entry.inuse * DEV_BSIZE

    def _read_io(self):
        return None

    def _swap_count(self):
        return self.libc.swapctl(SWAP_NSWAP, None, 0)

    def _swap_stats(self, count):
        table = (self.swapent * count)()
        status = self.libc.swapctl(self.SWAP_STATS, table, count)
        if status < 0:
            return status, []
        entries = [
            BlockEntry(decode_path(entry.se_path), entry.se_nblks, entry.se_inuse, entry.se_flags)
            for entry in table[:min(status, count)]
        ]
        return status, entries


class NetBsdReader(OpenBsdReader):
    """
    NetBSD adds paging counters, read from the vm.uvmexp2 sysctl.
    """
    SWAP_STATS = 10
    swapent = NetBsdSwapEnt

    supports_io = True
    supports_report_bytes = True

    def _read_io(self):
        try:
            counters = self._uvmexp()
        except OSError as e:
            self.log.warning("Paging activity unavailable: %s", e)
            return None
        return PagingActivity(counters[UVMEXP_PGSWAPIN], counters[UVMEXP_PGSWAPOUT])

    def _uvmexp(self):
        mib = (ctypes.c_int * 2)(CTL_VM, VM_UVMEXP2)
        buf = (ctypes.c_int64 * UVMEXP_SLOTS)()
        size = ctypes.c_size_t(ctypes.sizeof(buf))
        if self.libc.sysctl(mib, 2, buf, ctypes.byref(size), None, 0) != 0:
            raise last_os_error('sysctl (vm.uvmexp2)')
        return list(buf)
