from switchboard.core.logging.filters.http import HttpRequestLogDowngradeFilter

__all__ = ["HttpRequestLogDowngradeFilter"]
