from .data_url import parse_data_url, to_json_data_url
from .error_handler import ErrorHandler, convert_exceptions, log_exceptions
from .logging_config import LoggerManager, log_manager, setup_logging
from .validation import UNALLOWED_PATH_CHARACTERS

__all__ = [
    "parse_data_url",
    "to_json_data_url",
    "ErrorHandler",
    "convert_exceptions",
    "log_exceptions",
    "LoggerManager",
    "log_manager",
    "setup_logging",
    "UNALLOWED_PATH_CHARACTERS",
]
