import sys
from typing import Optional
from loguru import logger


class LoggerManager:
    def __init__(self):
        self.console_sink_id = None
        self.file_sink_id = None

    def enable_console(self, level: str = "INFO", serialize: bool = False):
        if self.console_sink_id is None:
            self.console_sink_id = logger.add(sys.stdout, level=level, colorize=not serialize, serialize=serialize)

    def disable_console(self):
        if self.console_sink_id is not None:
            logger.remove(self.console_sink_id)
            self.console_sink_id = None

    def enable_file(self, path: str, level: str = "INFO", rotation: str = "10 MB",
                    retention_days: int = 7, serialize: bool = False):
        if self.file_sink_id is None:
            self.file_sink_id = logger.add(
                path,
                level=level,
                rotation=rotation,
                retention=f"{retention_days} days",
                serialize=serialize,
                enqueue=True,
            )

    def disable_file(self):
        if self.file_sink_id is not None:
            logger.remove(self.file_sink_id)
            self.file_sink_id = None

    def get_logger(self):
        return logger


log_manager = LoggerManager()


def setup_logging(config, manager: Optional[LoggerManager] = None) -> LoggerManager:
    """
    Install loguru sinks described by a LoggingConfig.

    The default loguru handler is removed so that the configured level is
    the only one in effect.
    """
    manager = manager or log_manager
    logger.remove()
    manager.console_sink_id = None
    manager.file_sink_id = None

    manager.enable_console(level=config.level, serialize=config.enable_json)
    if config.enable_file_logging:
        manager.enable_file(
            config.log_file or "blob_storage_client.log",
            level=config.level,
            rotation=config.max_file_size,
            retention_days=config.retention_days,
            serialize=config.enable_json,
        )
    logger.debug(f"Logging configured at level {config.level}")
    return manager
