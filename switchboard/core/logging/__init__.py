from switchboard.core.logging.configuration import (
    NOISY_HTTP_LOGGERS,
    ConversationLogger,
    configure_root_logging,
    resolve_log_level,
    set_noisy_http_logger_levels,
)
from switchboard.core.logging.filters.http import HttpRequestLogDowngradeFilter
from switchboard.core.logging.formatters.correlation import CorrelationFormatter

__all__ = [
    "NOISY_HTTP_LOGGERS",
    "ConversationLogger",
    "CorrelationFormatter",
    "HttpRequestLogDowngradeFilter",
    "configure_root_logging",
    "resolve_log_level",
    "set_noisy_http_logger_levels",
]
