import asyncio
import logging
from io import StringIO

import pytest

from switchboard.core.logging.configuration import (
    NOISY_HTTP_LOGGERS,
    ConversationLogger,
    configure_root_logging,
    resolve_log_level,
    set_noisy_http_logger_levels,
)
from switchboard.core.logging.filters.http import HttpRequestLogDowngradeFilter
from switchboard.core.logging.formatters.correlation import CorrelationFormatter


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.mark.unit
class TestHttpRequestLogDowngradeFilter:
    def setup_method(self) -> None:
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        self.handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))

    def _emit(self, logger_name: str, level: int, message: str) -> str:
        logger = logging.getLogger(logger_name)
        logger.handlers = [self.handler]
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.log(level, message)
        self.handler.flush()
        output = self.stream.getvalue()
        self.stream.truncate(0)
        self.stream.seek(0)
        return output

    def test_downgrades_noisy_http_info_logs(self):
        output = self._emit("httpx", logging.INFO, "HTTP Request: GET /v1/models")
        assert output.startswith("DEBUG:HTTP Request: GET /v1/models")

    def test_preserves_noisy_http_warnings(self):
        output = self._emit("httpcore.connection", logging.WARNING, "connection reset")
        assert output.startswith("WARNING:connection reset")

    def test_preserves_non_noisy_info_logs(self):
        output = self._emit("switchboard.test", logging.INFO, "Catalog refreshed")
        assert output.startswith("INFO:Catalog refreshed")


@pytest.mark.unit
class TestNoisyHttpLoggerLevelSetter:
    def test_sets_warning_by_default(self):
        set_noisy_http_logger_levels("INFO")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_stays_debug_when_global_debug(self):
        set_noisy_http_logger_levels("DEBUG")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG


@pytest.mark.unit
class TestCorrelationFormatter:
    def _record(self, msg: str) -> logging.LogRecord:
        return logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg=msg,
            args=(),
            exc_info=None,
        )

    def test_adds_correlation_id(self):
        formatter = CorrelationFormatter("%(message)s")
        record = self._record("hello")
        record.correlation_id = "1234567890"

        formatted = formatter.format(record)
        assert formatted.startswith("[12345678] hello")
        assert record.msg == "hello"

    def test_without_correlation_id(self):
        formatter = CorrelationFormatter("%(message)s")
        assert formatter.format(self._record("hello")) == "hello"


@pytest.mark.unit
class TestConversationLogger:
    def test_correlation_context_stamps_records(self, caplog):
        logger = ConversationLogger.get_logger()
        with caplog.at_level(logging.INFO, logger="conversation"):
            with ConversationLogger.correlation_context("req-abc"):
                logger.info("inside")
            logger.info("outside")

        inside, outside = caplog.records
        assert inside.correlation_id == "req-abc"
        assert not hasattr(outside, "correlation_id")

    @pytest.mark.asyncio
    async def test_overlapping_contexts_stay_isolated(self, caplog):
        logger = ConversationLogger.get_logger()

        async def handle(request_id: str, delay: float) -> None:
            with ConversationLogger.correlation_context(request_id):
                logger.info(f"start {request_id}")
                await asyncio.sleep(delay)
                logger.info(f"end {request_id}")

        with caplog.at_level(logging.INFO, logger="conversation"):
            # req-b enters last and exits last
            await asyncio.gather(handle("req-a", 0.01), handle("req-b", 0.05))

        records = [r for r in caplog.records if r.name == "conversation"]
        assert len(records) == 4
        for record in records:
            assert record.getMessage().endswith(record.correlation_id)

        after = logger.makeRecord("conversation", logging.INFO, __file__, 1, "later", (), None)
        assert not hasattr(after, "correlation_id")

    def test_record_factory_installed_once(self, restore_root_logger):
        configure_root_logging("INFO")
        factory = logging.getLogRecordFactory()
        configure_root_logging("INFO")
        with ConversationLogger.correlation_context("req-abc"):
            pass
        assert logging.getLogRecordFactory() is factory


@pytest.mark.unit
class TestConfigureRootLogging:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("debug", "DEBUG"),
            ("WARNING  # noisy otherwise", "WARNING"),
            ("verbose", "INFO"),
            ("", "INFO"),
            (None, "INFO"),
        ],
    )
    def test_resolve_log_level(self, raw, expected):
        assert resolve_log_level(raw) == expected

    def test_installs_single_handler(self, restore_root_logger):
        configure_root_logging("INFO")
        configure_root_logging("INFO")
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, CorrelationFormatter)

    def test_emits_debug_startup_line_when_log_level_debug(self, restore_root_logger, capsys):
        level = configure_root_logging("DEBUG")
        assert level == "DEBUG"
        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger("uvicorn").level == logging.DEBUG
        assert "Logging configured at DEBUG" in capsys.readouterr().err

    def test_invalid_level_falls_back_to_info(self, restore_root_logger):
        assert configure_root_logging("LOUD") == "INFO"
        assert restore_root_logger.level == logging.INFO
        assert logging.getLogger("uvicorn").level == logging.WARNING
