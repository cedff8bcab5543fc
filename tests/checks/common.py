# stdlib
import copy
import importlib.util
import os
import unittest

# 3p
import mock
from datadog_checks.base import AgentCheck
from datadog_checks.base.stubs import aggregator

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
CHECKS_DIR = os.path.join(ROOT, 'checks.d')
FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixtures')

_check_modules = {}


def load_check_module(check_name):
    if check_name not in _check_modules:
        path = os.path.join(CHECKS_DIR, '%s.py' % check_name)
        spec = importlib.util.spec_from_file_location('checksd_%s' % check_name, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        _check_modules[check_name] = module
    return _check_modules[check_name]


def get_check_class(check_name):
    module = load_check_module(check_name)
    for value in vars(module).values():
        if isinstance(value, type) and issubclass(value, AgentCheck) and value.__module__ == module.__name__:
            return value
    raise Exception("No check class found in checks.d/%s.py" % check_name)


class Fixtures(object):
    @staticmethod
    def directory(check_name='system_swap'):
        return os.path.join(FIXTURES_DIR, check_name)

    @staticmethod
    def file(file_name, check_name='system_swap'):
        return os.path.join(Fixtures.directory(check_name), file_name)

    @staticmethod
    def read_file(file_name, check_name='system_swap'):
        with open(Fixtures.file(file_name, check_name)) as f:
            return f.read()


class AgentCheckTest(unittest.TestCase):
    CHECK_NAME = None

    def setUp(self):
        aggregator.reset()
        self.check = None

    def tearDown(self):
        aggregator.reset()

    def load_check(self, config, reader_class=None):
        check_class = get_check_class(self.CHECK_NAME)
        init_config = config.get('init_config') or {}
        instances = config.get('instances') or []
        if reader_class is None:
            self.check = check_class(self.CHECK_NAME, init_config, instances)
        else:
            with mock.patch.object(check_class, 'reader_class', reader_class):
                self.check = check_class(self.CHECK_NAME, init_config, instances)
        return self.check

    def run_check(self, config, mocks=None, reader_class=None):
        """
        Load the check and run it once per instance. `mocks` maps check method names
        to replacement functions.
        """
        self.load_check(config, reader_class=reader_class)
        for name, func in (mocks or {}).items():
            setattr(self.check, name, func)
        for instance in config.get('instances') or []:
            self.check.check(copy.deepcopy(instance))

    def metrics(self, name):
        return aggregator.metrics(name)

    def assertMetric(self, name, value=None, tags=None, count=None, metric_type=None):
        aggregator.assert_metric(name, value=value, tags=tags, count=count, metric_type=metric_type)

    def assertNoMetrics(self, *names):
        for name in names:
            self.assertEqual(len(aggregator.metrics(name)), 0, "%s should not have been submitted" % name)
