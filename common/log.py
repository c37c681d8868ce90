"""Shared logging utilities for the rule engine."""

import logging

import common.settings

ENGINE_LOGGER = 'hive'
HANDLER_NAME = 'hive'
# Board path searches log once per searched move, which floods generation.
SEARCH_LOGGER_PREFIX = 'hive.models.board'


class ModuleFilter(logging.Filter):
    """Filter out records emitted by loggers under a given prefix."""

    def __init__(self, prefix: str) -> None:
        super().__init__()
        self.prefix = prefix

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress records from the filtered module tree."""
        return not (
            record.name == self.prefix or record.name.startswith(self.prefix + '.')
        )


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the engine logger and set its level.

    Search tracing is filtered out unless ``HIVE_TRACE_SEARCH`` is set.
    Calling this more than once does not stack handlers.
    """
    logger = logging.getLogger(ENGINE_LOGGER)
    logger.setLevel(level or common.settings.LOG_LEVEL)

    handler = next(
        (h for h in logger.handlers if h.get_name() == HANDLER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
        )
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    for f in list(handler.filters):
        if isinstance(f, ModuleFilter):
            handler.removeFilter(f)
    if not common.settings.TRACE_SEARCH:
        handler.addFilter(ModuleFilter(SEARCH_LOGGER_PREFIX))
    return logger
