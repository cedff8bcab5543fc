# 3p
from datadog_checks.base.errors import CheckException, ConfigurationError


class SwapError(CheckException):
    """Base class for everything a swap reader can fail with."""


class SourceUnavailableError(SwapError):
    """The OS facility could not be opened or queried."""


class MissingFieldError(SwapError):
    def __init__(self, source, field):
        super(MissingFieldError, self).__init__("Missing '%s' field in %s" % (field, source))
        self.source = source
        self.field = field


class InconsistentAggregateError(SwapError):
    def __init__(self, total, used):
        super(InconsistentAggregateError, self).__init__(
            "Inconsistent swap totals: total %g bytes, used %g bytes" % (total, used))
        self.total = total
        self.used = used


class InitializationError(SwapError, ConfigurationError):
    """Raised while acquiring long-lived handles; the check cannot start."""
