# stdlib
from collections import namedtuple
import logging

log = logging.getLogger(__name__)

GAUGE = 'gauge'
COUNTER = 'counter'

USAGE = 'system.paging.usage'
UTILIZATION = 'system.paging.utilization'
OPERATIONS = 'system.paging.operations'
IO = 'system.paging.io'

LABEL_DEVICE = 'system.device'
LABEL_STATE = 'system.paging.state'
LABEL_DIRECTION = 'system.paging.direction'


class MetricRecord(namedtuple('MetricRecord', ['name', 'labels', 'value', 'metric_type'])):
    __slots__ = ()

    def __new__(cls, name, labels, value, metric_type):
        return super(MetricRecord, cls).__new__(cls, name, tuple(sorted(labels.items())), value, metric_type)

    def label(self, key):
        for label_key, label_value in self.labels:
            if label_key == key:
                return label_value
        return None

    def tags(self):
        return ["%s:%s" % (key, value) for key, value in self.labels]


class MetricFamily(object):
    def __init__(self, name, metric_type, help_text=None):
        self.name = name
        self.metric_type = metric_type
        self.help = help_text
        self.records = []

    def append(self, labels, value):
        record = MetricRecord(self.name, labels, value, self.metric_type)
        self.records.append(record)
        return record

    def clear(self):
        self.records = []

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __repr__(self):
        return "MetricFamily(%s, %s, %d records)" % (self.name, self.metric_type, len(self.records))


class SwapFamilies(object):
    """
    The four families of one collection cycle. A fresh instance is made for every cycle.
    """

    def __init__(self):
        self.usage = MetricFamily(USAGE, GAUGE, "Unix swap usage")
        self.utilization = MetricFamily(UTILIZATION, GAUGE, "Unix swap utilization")
        # used when report_io is on and report_bytes is off
        self.operations = MetricFamily(OPERATIONS, COUNTER, "Unix paging operations")
        # used when both report_io and report_bytes are on
        self.io = MetricFamily(IO, COUNTER, "Unix paging I/O in bytes")

    def all(self):
        return [self.usage, self.utilization, self.operations, self.io]

    def is_empty(self):
        return all(len(family) == 0 for family in self.all())

    def dispatch(self, submit):
        """
        Hand every non-empty family to `submit`, then clear all of them.
        Best effort per family: an exception from `submit` is logged and the next family
        is still handed over, but records of the failing family that `submit` had
        already sent stay sent. Returns the number of families submitted without error.
        """
        dispatched = 0
        for family in self.all():
            if len(family) > 0:
                try:
                    submit(family)
                    dispatched += 1
                except Exception:
                    log.exception("Dispatching metric family %s failed", family.name)
            family.clear()
        return dispatched
