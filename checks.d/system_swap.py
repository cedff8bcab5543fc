"""
    Swap space usage and paging activity of the host.
"""

# 3p
from datadog_checks.base import AgentCheck

# project
from swapstats.config import DEFAULT_PROCFS_PATH, SwapConfig, SwapContext
from swapstats.errors import SwapError
from swapstats.families import GAUGE, SwapFamilies
from swapstats.normalizer import submit_io, submit_usage
from swapstats.readers import PLATFORM_READER


class SystemSwap(AgentCheck):
    reader_class = PLATFORM_READER

    def __init__(self, name, init_config, instances=None):
        super(SystemSwap, self).__init__(name, init_config, instances or [])
        instance = self.instance or {}
        init_config = self.init_config or {}

        procfs_path = instance.get('procfs_path', init_config.get('procfs_path', DEFAULT_PROCFS_PATH))
        config = SwapConfig.from_instance(instance, self.reader_class, self.log)
        self.context = SwapContext(config, procfs_path=procfs_path, tags=instance.get('tags', []))

        # a reader that cannot initialize stops the check from being scheduled at all
        self.reader = self.reader_class(self.context, self.log)
        self.reader.initialize()

    def check(self, instance):
        families = SwapFamilies()

        try:
            collection = self.reader.collect()
        except SwapError as e:
            self.log.error("Unable to collect swap statistics: %s", e)
            raise

        if collection.skipped:
            self.log.debug("%d swap entries skipped as malformed", collection.skipped)

        config = self.context.config
        for reading in collection.readings:
            submit_usage(families, reading, config)
        submit_io(families, collection.paging, config, self.context.page_size)

        families.dispatch(self._submit_family)

    def _submit_family(self, family):
        submit = self.gauge if family.metric_type == GAUGE else self.monotonic_count
        # one bad record does not drop the rest of its family
        for record in family:
            tags = self.context.tags + record.tags()
            try:
                submit(record.name, record.value, tags=tags)
            except Exception:
                self.log.exception("Unable to submit %s with tags %s", record.name, tags)

    def cancel(self):
        self.reader.close()
