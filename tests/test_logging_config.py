# Area: Shared Tests
"""Tests for logging setup."""

import json
import logging

from king_of_hearts.errors import GenerationFailure
from king_of_hearts._shared.logging_config import (
    JSONFormatter,
    TerminalFormatter,
    log_package_error,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_handlers(self, tmp_path):
        setup_logging(str(tmp_path / "logs" / "koh.log"), "debug")
        pkg_logger = logging.getLogger("king_of_hearts")
        assert pkg_logger.level == logging.DEBUG
        assert pkg_logger.propagate is False
        assert [type(h.formatter) for h in pkg_logger.handlers] == [TerminalFormatter, JSONFormatter]

    def test_no_file(self):
        setup_logging(None)
        assert len(logging.getLogger("king_of_hearts").handlers) == 1

    def test_json_file_output(self, tmp_path):
        path = tmp_path / "koh.log"
        setup_logging(str(path))
        logging.getLogger("king_of_hearts.game.round").info(
            "Ana picked 'Wine'", extra={"player": "Ana"}
        )
        for handler in logging.getLogger("king_of_hearts").handlers:
            handler.flush()
        record = json.loads(path.read_text().strip().splitlines()[-1])
        assert record["message"] == "Ana picked 'Wine'"
        assert record["logger"] == "king_of_hearts.game.round"
        assert record["player"] == "Ana"

    def test_repeat_setup_replaces_handlers(self):
        setup_logging(None)
        setup_logging(None)
        assert len(logging.getLogger("king_of_hearts").handlers) == 1


class TestLogPackageError:
    """Tests for log_package_error()."""

    def test_logs_summary_and_block(self, caplog):
        caplog.set_level(logging.DEBUG, logger="king_of_hearts")
        log_package_error(GenerationFailure("Wine", "timeout"), level=logging.WARNING)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings[0].getMessage() == "GenerationFailure: Generation failed for 'Wine': timeout"
        assert warnings[0].error_type == "GenerationFailure"
        assert "GENERATION_FAILURE" in warnings[1].getMessage()

    def test_block_visible_at_info(self, caplog):
        """The structured block is not hidden below the default INFO level."""
        caplog.set_level(logging.INFO, logger="king_of_hearts")
        log_package_error(GenerationFailure("Wine", "timeout"))
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 2
        assert "GENERATION_FAILURE" in errors[1].getMessage()


class TestTerminalFormatter:
    """Tests for TerminalFormatter."""

    def test_level_name_restored(self):
        record = logging.LogRecord("king_of_hearts", logging.INFO, __file__, 1, "hi", None, None)
        text = TerminalFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[32m" in text
        assert record.levelname == "INFO"
