"""
    Linux swap statistics from procfs.

    /proc/swaps lists one active swap area per line, /proc/meminfo has the
    system-wide figures and /proc/vmstat the paging counters.
"""

# stdlib
import math
import os

# project
from swapstats.errors import InconsistentAggregateError, MissingFieldError, SourceUnavailableError
from swapstats.readers.base import SwapReader
from swapstats.readings import PagingActivity, SwapCollection, reading_from_parts, reading_from_total

KIB = 1024

SWAPS_FIELDS = 5
SWAPS_HEADER = 'Filename'
VMSTAT_FIELDS = {
    'pswpin': 'swapped_in',
    'pswpout': 'swapped_out',
}


def parse_float(text):
    """Returns None for anything that is not a finite number, nan and inf included."""
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_swaps(lines):
    """
    Parse the /proc/swaps table. Yields (path, total KiB, used KiB) for every usable row
    and None for every malformed one.
    """
    for line in lines:
        fields = line.split()
        if not fields or fields[0] == SWAPS_HEADER:
            continue
        if len(fields) != SWAPS_FIELDS:
            yield None
            continue

        total = parse_float(fields[2])
        used = parse_float(fields[3])
        if total is None or used is None:
            yield None
            continue

        yield fields[0], total, used


def parse_meminfo(lines):
    """
    Returns the SwapTotal, SwapFree and SwapCached values (KiB) found in /proc/meminfo,
    keyed by lower-cased name. Unparseable values are left out.
    """
    wanted = ('swaptotal:', 'swapfree:', 'swapcached:')
    values = {}
    for line in lines:
        fields = line.split()
        if len(fields) < 2:
            continue
        key = fields[0].lower()
        if key not in wanted:
            continue
        value = parse_float(fields[1])
        if value is not None:
            values[key.rstrip(':')] = value
    return values


def parse_vmstat(lines):
    counters = {}
    for line in lines:
        fields = line.split()
        if len(fields) != 2:
            continue
        name = VMSTAT_FIELDS.get(fields[0].lower())
        if name is None:
            continue
        try:
            counters[name] = int(fields[1])
        except ValueError:
            continue
    return counters


class LinuxReader(SwapReader):
    supports_by_device = True
    supports_io = True
    supports_report_bytes = True

    def _path(self, name):
        return os.path.join(self.context.procfs_path, name)

    def _read_lines(self, name):
        path = self._path(name)
        try:
            # undecodable bytes in swap paths become U+FFFD
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return f.readlines()
        except IOError as e:
            raise SourceUnavailableError("Unable to read %s: %s" % (path, e))

    def collect(self):
        if self.report_by_device:
            collection = self._read_separate()
        else:
            collection = self._read_combined()

        if self.report_io:
            collection.paging = self._read_io()

        return collection

    def _read_separate(self):
        readings = []
        skipped = 0
        for row in parse_swaps(self._read_lines('swaps')):
            reading = None
            if row is not None:
                path, total, used = row
                reading = reading_from_total(path, total * KIB, used * KIB)
            if reading is None:
                skipped += 1
                continue
            readings.append(reading)

        if skipped:
            self.log.debug("Skipped %d malformed lines in %s", skipped, self._path('swaps'))
        return SwapCollection(readings, skipped=skipped)

    def _read_combined(self):
        values = parse_meminfo(self._read_lines('meminfo'))

        for field in ('swaptotal', 'swapfree'):
            if field not in values:
                raise MissingFieldError(self._path('meminfo'), field)

        total = values['swaptotal']
        free = values['swapfree']
        cached = values.get('swapcached')

        # Some systems, OpenVZ for example, don't provide SwapCached.
        if cached is None:
            used = total - free
        else:
            used = total - (free + cached)

        if used < 0:
            raise InconsistentAggregateError(total * KIB, used * KIB)

        other = cached * KIB if cached is not None else None
        reading = reading_from_parts(None, used * KIB, free * KIB, 'cached', other)
        if reading is None:
            raise InconsistentAggregateError(total * KIB, used * KIB)
        return SwapCollection([reading])

    def _read_io(self):
        try:
            counters = parse_vmstat(self._read_lines('vmstat'))
        except SourceUnavailableError as e:
            self.log.warning("Paging activity unavailable: %s", e)
            return None

        if 'swapped_in' not in counters or 'swapped_out' not in counters:
            self.log.warning("Paging activity unavailable: pswpin/pswpout missing from %s", self._path('vmstat'))
            return None

        return PagingActivity(counters['swapped_in'], counters['swapped_out'])
