"""
Unit tests for structured logging setup.
"""

import json
import logging

import structlog
from plotseries.config import MonitoringConfig
from plotseries.observability import configure_logging


class TestConfigureLogging:
    """Test that logging is routed through structlog renderers."""

    def teardown_method(self):
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.WARNING)

    def _records(self, path):
        return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]

    def test_json_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "plotseries.log"
        configure_logging(MonitoringConfig(log_level="DEBUG", log_file=str(log_file)))

        structlog.get_logger("plotseries.test").info("Loaded plot series", points=4)

        records = self._records(log_file)
        assert records[0]["event"] == "Logging configured"
        assert records[-1]["event"] == "Loaded plot series"
        assert records[-1]["points"] == 4
        assert records[-1]["level"] == "info"
        assert records[-1]["logger"] == "plotseries.test"
        assert "timestamp" in records[-1]

    def test_context_variables_are_merged(self, tmp_path):
        log_file = tmp_path / "plotseries.log"
        configure_logging(MonitoringConfig(log_file=str(log_file)))

        with structlog.contextvars.bound_contextvars(build_number=42):
            structlog.get_logger("plotseries.test").warning("Series data unavailable")

        assert self._records(log_file)[-1]["build_number"] == 42

    def test_standard_library_records(self, tmp_path):
        log_file = tmp_path / "plotseries.log"
        configure_logging(MonitoringConfig(log_file=str(log_file)))

        logging.getLogger("plotseries.config.config").warning("Configuration file is empty: %s", "a.yaml")

        record = self._records(log_file)[-1]
        assert record["event"] == "Configuration file is empty: a.yaml"
        assert record["level"] == "warning"

    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "plotseries.log"
        configure_logging(MonitoringConfig(log_level="warning", log_file=str(log_file)))

        structlog.get_logger("plotseries.test").debug("Adding node")

        assert all(record["event"] != "Adding node" for record in self._records(log_file))

    def test_console_output(self, capsys):
        configure_logging(MonitoringConfig())

        structlog.get_logger("plotseries.test").info("Loaded plot series", points=2)

        err = capsys.readouterr().err
        assert "Loaded plot series" in err
        assert "points=2" in err
