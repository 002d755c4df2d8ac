"""
Tests for the append-only report log.
"""

import json

from mining_reports.logging import ReportLogger, get_logger
from mining_reports.models import ActionType, ExchangeRates, RecentCredits


class TestReportLogger:
    """Tests for ReportLogger."""

    def test_creates_parent_directory(self, tmp_path):
        logger = ReportLogger(tmp_path / "nested" / "log.jsonl")
        assert logger.log_path.parent.exists()

    def test_one_json_line_per_entry(self, tmp_path):
        logger = ReportLogger(tmp_path / "log.jsonl")

        logger.log_rates_fetched("ethereum", ExchangeRates(crypto_usd=2000.0, usd_local=1.3))
        logger.log_credits_fetched("ethereum", RecentCredits(amount=0.5))

        lines = (tmp_path / "log.jsonl").read_text().splitlines()
        assert len(lines) == 2
        record = json.loads(lines[0])
        assert record["action_type"] == "RATES_FETCHED"
        assert record["coin"] == "ethereum"
        assert record["details"] == {"crypto_usd": 2000.0, "usd_local": 1.3}

    def test_config_loaded_omits_api_keys(self, tmp_path, sample_config):
        logger = ReportLogger(tmp_path / "log.jsonl")

        logger.log_config_loaded(sample_config, "report.yaml")

        text = (tmp_path / "log.jsonl").read_text()
        assert "test-api-key" not in text
        assert "test-sendgrid-key" not in text

    def test_read_and_filter(self, tmp_path):
        logger = ReportLogger(tmp_path / "log.jsonl")
        logger.log_credits_fetched("ethereum", RecentCredits(amount=0.5))
        logger.log_report_sent("ethereum", "24hour_credit", {"mined": 0.5}, 202)

        entries = logger.read_log()
        assert [e.action_type for e in entries] == [
            ActionType.CREDITS_FETCHED,
            ActionType.REPORT_SENT,
        ]

        sent = logger.filter_by_action_type(ActionType.REPORT_SENT)
        assert len(sent) == 1
        assert sent[0].details["status_code"] == 202

    def test_read_missing_log(self, tmp_path):
        assert ReportLogger(tmp_path / "log.jsonl").read_log() == []


def test_get_logger_disabled_without_path():
    assert get_logger(None) is None
    assert get_logger("") is None


def test_get_logger_with_path(tmp_path):
    assert isinstance(get_logger(tmp_path / "log.jsonl"), ReportLogger)
