import logging


class CorrelationFormatter(logging.Formatter):
    """Prefixes messages with the first 8 characters of ``record.correlation_id``."""

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            original_msg = record.msg
            record.msg = f"[{str(correlation_id)[:8]}] {record.msg}"
            try:
                return super().format(record)
            finally:
                record.msg = original_msg
        return super().format(record)
