# stdlib
from collections import namedtuple
import logging
import mmap

log = logging.getLogger(__name__)

DEFAULT_PROCFS_PATH = '/proc'

TRUE_STRINGS = ('1', 'true', 'yes', 'on')
FALSE_STRINGS = ('0', 'false', 'no', 'off')

# instance keys consumed by the agent itself, never reported as unknown
FRAMEWORK_KEYS = frozenset([
    'tags',
    'mincollectioninterval',
    'service',
    'name',
    'emptydefaulthostname',
    'procfspath',
    'metricpatterns',
])


def normalize_key(key):
    """'ReportByDevice' and 'report_by_device' both become 'reportbydevice'."""
    return str(key).replace('_', '').replace('-', '').lower()


def parse_boolean(value):
    """
    Returns True or False, or None if the value cannot be read as a boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    return None


class SwapConfig(namedtuple('SwapConfig', [
        'report_bytes', 'report_by_device', 'values_absolute', 'values_percentage', 'report_io'])):
    __slots__ = ()

    DEFAULTS = {
        'report_bytes': False,
        'report_by_device': False,
        'values_absolute': True,
        'values_percentage': False,
        'report_io': True,
    }

    # normalized key -> (field, reader capability that must be present)
    OPTIONS = {
        'reportbytes': ('report_bytes', 'supports_report_bytes'),
        'reportbydevice': ('report_by_device', 'supports_by_device'),
        'valuesabsolute': ('values_absolute', None),
        'valuespercentage': ('values_percentage', None),
        'reportio': ('report_io', None),
    }

    def __new__(cls, report_bytes=False, report_by_device=False, values_absolute=True,
                values_percentage=False, report_io=True):
        return super(SwapConfig, cls).__new__(
            cls, report_bytes, report_by_device, values_absolute, values_percentage, report_io)

    @classmethod
    def from_instance(cls, instance, reader_class=None, logger=None):
        """
        Read the options of one check instance. Unknown keys, unsupported options and
        values that are not booleans are logged and ignored, keeping the defaults.
        """
        logger = logger or log
        options = dict(cls.DEFAULTS)

        for key, value in (instance or {}).items():
            normalized = normalize_key(key)
            if normalized in FRAMEWORK_KEYS:
                continue

            if normalized not in cls.OPTIONS:
                logger.warning('Unknown config option: "%s"', key)
                continue

            field, capability = cls.OPTIONS[normalized]
            if capability and reader_class is not None and not getattr(reader_class, capability, False):
                logger.warning('The "%s" option is not supported on this platform. '
                               'The option is going to be ignored.', key)
                continue

            parsed = parse_boolean(value)
            if parsed is None:
                logger.warning('The "%s" option requires a boolean argument, got %r. '
                               'Keeping the default (%s).', key, value, options[field])
                continue
            options[field] = parsed

        return cls(**options)


class SwapContext(namedtuple('SwapContext', ['config', 'page_size', 'procfs_path', 'tags'])):
    """
    Everything a reader and the normalizers need, fixed once the check is constructed.
    """
    __slots__ = ()

    def __new__(cls, config, page_size=None, procfs_path=DEFAULT_PROCFS_PATH, tags=None):
        if page_size is None:
            page_size = mmap.PAGESIZE
        procfs_path = (procfs_path or DEFAULT_PROCFS_PATH).rstrip('/') or '/'
        return super(SwapContext, cls).__new__(cls, config, int(page_size), procfs_path, list(tags or []))
