# stdlib
import math
from unittest import TestCase

# project
from swapstats.config import SwapConfig
from swapstats.families import SwapFamilies
from swapstats.normalizer import percentage, submit_io, submit_usage
from swapstats.readings import PagingActivity, SwapReading


def values(family):
    return [(record.label('system.paging.state'), record.value) for record in family]


class TestUsageNormalizer(TestCase):

    def setUp(self):
        self.families = SwapFamilies()

    def test_absolute_only(self):
        submit_usage(self.families, SwapReading(None, 30, 70), SwapConfig())
        self.assertEqual(values(self.families.usage), [('used', 30.0), ('free', 70.0)])
        self.assertEqual(len(self.families.utilization), 0)
        for record in self.families.usage:
            self.assertIsNone(record.label('system.device'))

    def test_percentage(self):
        config = SwapConfig(values_absolute=False, values_percentage=True)
        submit_usage(self.families, SwapReading(None, 30, 70), config)
        self.assertEqual(len(self.families.usage), 0)
        self.assertEqual(values(self.families.utilization), [('used', 30.0), ('free', 70.0)])

    def test_other_state(self):
        config = SwapConfig(values_absolute=True, values_percentage=True)
        submit_usage(self.families, SwapReading(None, 600, 300, 'cached', 100), config)
        self.assertEqual(values(self.families.usage), [('cached', 100.0), ('used', 600.0), ('free', 300.0)])
        self.assertEqual(values(self.families.utilization), [('cached', 10.0), ('used', 60.0), ('free', 30.0)])

    def test_device_label(self):
        submit_usage(self.families, SwapReading('/dev/sda2', 1, 2), SwapConfig(values_percentage=True))
        for record in list(self.families.usage) + list(self.families.utilization):
            self.assertEqual(record.label('system.device'), '/dev/sda2')

    def test_neither_absolute_nor_percentage(self):
        config = SwapConfig(values_absolute=False, values_percentage=False)
        submit_usage(self.families, SwapReading('/dev/sda2', 30, 70, 'cached', 5), config)
        self.assertTrue(self.families.is_empty())

    def test_zero_total_emits_nan(self):
        config = SwapConfig(values_absolute=False, values_percentage=True)
        submit_usage(self.families, SwapReading(None, 0, 0), config)
        self.assertEqual(len(self.families.utilization), 2)
        for record in self.families.utilization:
            self.assertTrue(math.isnan(record.value))

    def test_percentage_helper(self):
        self.assertEqual(percentage(1, 4), 25.0)
        self.assertTrue(math.isnan(percentage(0, 0)))


class TestIONormalizer(TestCase):

    def setUp(self):
        self.families = SwapFamilies()

    def directions(self, family):
        return [(record.label('system.paging.direction'), record.value) for record in family]

    def test_operations(self):
        submit_io(self.families, PagingActivity(1234, 5678), SwapConfig(), 4096)
        self.assertEqual(self.directions(self.families.operations), [('in', 1234), ('out', 5678)])
        self.assertEqual(len(self.families.io), 0)

    def test_bytes_are_exact(self):
        big = 2 ** 52 + 1
        submit_io(self.families, PagingActivity(big, 3), SwapConfig(report_bytes=True), 4096)
        self.assertEqual(self.directions(self.families.io), [('in', big * 4096), ('out', 3 * 4096)])
        self.assertEqual(len(self.families.operations), 0)
        self.assertIsInstance(self.families.io.records[0].value, int)

    def test_report_io_disabled(self):
        submit_io(self.families, PagingActivity(1, 2), SwapConfig(report_io=False), 4096)
        self.assertTrue(self.families.is_empty())

    def test_no_activity(self):
        submit_io(self.families, None, SwapConfig(), 4096)
        self.assertTrue(self.families.is_empty())
