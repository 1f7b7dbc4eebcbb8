from switchboard.core.logging.formatters.correlation import CorrelationFormatter

__all__ = ["CorrelationFormatter"]
