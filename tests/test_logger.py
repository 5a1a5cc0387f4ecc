"""
Tests for logger functionality.
"""

from jobmatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["scores_computed"] == 0

    def test_log_file_written(self, tmp_path):
        """File output lands in the configured directory."""
        logger = StructuredLogger(name="test-file", log_dir=tmp_path, enable_console=False)
        logger.info("Message with context", job="engineer", percent=92)
        for handler in logger.logger.handlers:
            handler.flush()

        files = list(tmp_path.glob("jobmatch_*.log"))
        assert len(files) == 1
        content = files[0].read_text(encoding="utf-8")
        assert "Message with context" in content
        assert '"percent": 92' in content

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")

    def test_score_metrics(self):
        """Scores and skipped criteria are tracked per policy."""
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)

        logger.record_score("hr", ("location",))
        logger.record_score("hr")
        logger.record_score("seeker", ("salary", "role"))

        metrics = logger.get_metrics()
        assert metrics["scores_computed"] == 3
        assert metrics["scores_by_policy"] == {"hr": 2, "seeker": 1}
        assert metrics["criteria_skipped"] == {
            "hr.location": 1,
            "seeker.salary": 1,
            "seeker.role": 1,
        }

    def test_rejection_metrics(self):
        """Rejected records are tracked by error type."""
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)

        logger.record_rejection("invalid_job")
        logger.record_rejection("invalid_job")
        logger.record_rejection("invalid_profile")

        metrics = logger.get_metrics()
        assert metrics["records_rejected"] == 3
        assert metrics["errors_by_type"] == {"invalid_job": 2, "invalid_profile": 1}

    def test_get_metrics_is_a_copy(self):
        """Mutating the snapshot does not affect the logger."""
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)
        snapshot = logger.get_metrics()
        snapshot["scores_by_policy"]["hr"] = 10
        assert logger.metrics["scores_by_policy"] == {}

    def test_metrics_summary(self, capsys):
        """Summary logging should not raise."""
        logger = StructuredLogger(name="test-summary", enable_file=False)
        logger.record_score("hr", ("keywords",))
        logger.record_rejection("invalid_job")
        logger.log_metrics_summary()

        err = capsys.readouterr().err
        assert "Scores computed: 1" in err
        assert "hr.keywords: 1" in err


class TestGlobalLogger:
    """Test global logger instance."""

    def test_get_logger_singleton(self):
        """get_logger should return same instance."""
        logger1 = get_logger()
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self):
        """reset_logger should clear global instance."""
        logger1 = get_logger()
        reset_logger()
        logger2 = get_logger()

        assert logger1 is not logger2

    def test_level_from_environment(self, monkeypatch):
        """JOBMATCH_LOG_LEVEL sets the level of a new global logger."""
        monkeypatch.setenv("JOBMATCH_LOG_LEVEL", "debug")
        reset_logger()
        assert get_logger().logger.level == 10
