# stdlib
from collections import namedtuple
import math


class SwapReading(namedtuple('SwapReading', ['device', 'used', 'free', 'other_name', 'other'])):
    """
    Swap space of one device, or of the whole system when `device` is None.
    All values are bytes. `other` is an optional extra state such as "cached".
    """
    __slots__ = ()

    def __new__(cls, device, used, free, other_name=None, other=None):
        return super(SwapReading, cls).__new__(cls, device, used, free, other_name, other)

    @property
    def has_other(self):
        return self.other_name is not None and self.other is not None and not math.isnan(self.other)

    @property
    def total(self):
        total = self.used + self.free
        if self.has_other:
            total += self.other
        return total

    def states(self):
        """
        (state, bytes) pairs in emission order: the extra state first, then used and free.
        """
        states = []
        if self.has_other:
            states.append((self.other_name, self.other))
        states.append(('used', self.used))
        states.append(('free', self.free))
        return states


def reading_from_parts(device, used, free, other_name=None, other=None):
    """
    Build a reading from used and free space; None if any part is negative.
    """
    if used < 0 or free < 0:
        return None
    if other_name is not None and other is not None and other < 0:
        return None
    return SwapReading(device, used, free, other_name, other)


def reading_from_total(device, total, used):
    """
    Build a reading from the total and used space of a device; None when total < used.
    """
    if total < 0 or used < 0 or total < used:
        return None
    return SwapReading(device, used, total - used)


class PagingActivity(namedtuple('PagingActivity', ['swapped_in', 'swapped_out'])):
    """Pages swapped in and out since boot."""
    __slots__ = ()


class SwapCollection(object):
    def __init__(self, readings=None, paging=None, skipped=0):
        self.readings = list(readings or [])
        self.paging = paging
        # source entries dropped as malformed during this collection
        self.skipped = skipped

    def __len__(self):
        return len(self.readings)

    def __repr__(self):
        return "SwapCollection(readings=%r, paging=%r, skipped=%d)" % (self.readings, self.paging, self.skipped)
