# stdlib
import logging

# project
from swapstats.errors import InconsistentAggregateError
from swapstats.readings import SwapCollection, reading_from_total


class SwapReader(object):
    """
    Reads swap space and paging activity from one platform facility.

    Subclasses implement `collect()`, returning a SwapCollection or raising a SwapError,
    and declare which of the optional outputs their platform can supply.
    """
    supports_by_device = False
    supports_io = False
    supports_report_bytes = False

    def __init__(self, context, logger=None):
        self.context = context
        self.config = context.config
        self.page_size = context.page_size
        self.log = logger or logging.getLogger(__name__)

    def initialize(self):
        """Acquire long-lived handles. Called once, before the first collection."""
        pass

    def close(self):
        pass

    def collect(self):
        raise NotImplementedError

    @property
    def report_by_device(self):
        return self.supports_by_device and self.config.report_by_device

    @property
    def report_io(self):
        return self.supports_io and self.config.report_io


class SwapAreaReader(SwapReader):
    """
    Reader for facilities that enumerate swap areas. Areas are either reported one by
    one or summed into a single system-wide reading, depending on report_by_device.
    """
    supports_by_device = True

    def _summarize(self, areas, skipped=0):
        """
        `areas` yields (path, total bytes, used bytes) for every active area.
        """
        readings = []
        total = 0
        used = 0
        for path, area_total, area_used in areas:
            if not self.report_by_device:
                total += area_total
                used += area_used
                continue

            reading = reading_from_total(path, area_total, area_used)
            if reading is None:
                self.log.debug("Skipping swap area %s: total %s is less than used %s", path, area_total, area_used)
                skipped += 1
                continue
            readings.append(reading)

        if not self.report_by_device:
            if total < used or used < 0:
                raise InconsistentAggregateError(total, used)
            readings.append(reading_from_total(None, total, used))

        return SwapCollection(readings, skipped=skipped)
