# stdlib
import ctypes

# project
from swapstats.errors import InconsistentAggregateError, SourceUnavailableError
from swapstats.readers.base import SwapReader
from swapstats.readers.native import last_os_error, load_library
from swapstats.readings import PagingActivity, SwapCollection, reading_from_parts

PERFSTAT_MEMORY_TOTAL_FIELDS = [
    'virt_total', 'real_total', 'real_free', 'real_pinned', 'real_inuse',
    'pgbad', 'pgexct', 'pgins', 'pgouts', 'pgspins', 'pgspouts',
    'scans', 'cycles', 'pgsteals', 'numperm',
    'pgsp_total', 'pgsp_free', 'pgsp_rsvd',
    'real_system', 'real_user', 'real_process', 'virt_active',
]


class PerfstatMemoryTotal(ctypes.Structure):
    # the first revision of perfstat_memory_total_t; newer libraries accept it by size
    _fields_ = [(name, ctypes.c_ulonglong) for name in PERFSTAT_MEMORY_TOTAL_FIELDS]


class PerfstatReader(SwapReader):
    """
    AIX: one perfstat_memory_total() call has paging space sizes and paging counters,
    all in pages. Reserved paging space is reported as its own state.
    """
    supports_io = True
    supports_report_bytes = True

    def __init__(self, context, logger=None):
        super(PerfstatReader, self).__init__(context, logger)
        self.libperfstat = None

    def initialize(self):
        self.libperfstat = load_library('perfstat', member='shr_64.o')

    def collect(self):
        memory = self._memory_total()

        total = memory.pgsp_total * self.page_size
        free = memory.pgsp_free * self.page_size
        reserved = memory.pgsp_rsvd * self.page_size
        used = total - free - reserved

        reading = reading_from_parts(None, used, free, 'reserved', reserved)
        if reading is None:
            raise InconsistentAggregateError(total, free + reserved)

        collection = SwapCollection([reading])
        if self.report_io:
            collection.paging = PagingActivity(memory.pgspins, memory.pgspouts)
        return collection

    def _memory_total(self):
        memory = PerfstatMemoryTotal()
        status = self.libperfstat.perfstat_memory_total(None, ctypes.byref(memory), ctypes.sizeof(memory), 1)
        if status < 0:
            raise SourceUnavailableError("perfstat_memory_total: %s" % last_os_error('perfstat_memory_total'))
        return memory
