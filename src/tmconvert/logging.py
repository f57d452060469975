"""
Logging setup for tmconvert.

Log records go through loguru. Converters and entry points log with the shared
`logger`; `configure_logger` installs the sinks described by
`settings.logging` and runs once when the package is imported. Console output
goes to stderr so that the CLI's own messages on stdout stay clean.

Example:
::
    from tmconvert.logging import configure_logger
    from tmconvert.settings import LoggingSettings

    configure_logger(LoggingSettings(console_log_level="DEBUG"))
"""

import sys
from typing import Optional

from loguru import logger

from tmconvert.settings import LoggingSettings, settings

__all__ = ["CONSOLE_FORMAT", "DEFAULT_LOG_FILE", "configure_logger", "logger"]


CONSOLE_FORMAT = "{time:HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
DEFAULT_LOG_FILE = "tmconvert.log"


def configure_logger(config: Optional[LoggingSettings] = None) -> list[int]:
    """
    Install the console and file sinks for the tmconvert logger.

    :param config: The logging settings to apply, defaults to `settings.logging`
    :return: The loguru handler ids that were added, empty when logging is
        disabled
    """
    config = config or settings.logging

    if config.disabled:
        logger.disable("tmconvert")
        return []

    logger.enable("tmconvert")
    if config.clear_loggers:
        logger.remove()

    handlers = [
        logger.add(
            sys.stderr,
            level=config.console_log_level.upper(),
            format=CONSOLE_FORMAT,
        )
    ]

    if config.log_file or config.log_file_level:
        # serialized records, one JSON object per line
        handlers.append(
            logger.add(
                config.log_file or DEFAULT_LOG_FILE,
                level=(config.log_file_level or "INFO").upper(),
                serialize=True,
            )
        )

    return handlers


configure_logger()
