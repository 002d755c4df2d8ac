"""
Append-only report logging.

Every fetch and send performed for a report is recorded as one JSON line,
giving farm operators a trail to reconcile their books against.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from mining_reports.models import (
    ActionType,
    ExchangeRates,
    RecentCredits,
    ReportConfig,
    ReportLogEntry,
)


class ReportLogger:
    """
    Append-only report logger.

    Writes all actions to a JSONL file for audit purposes.
    Each line is a complete JSON object representing one action.
    """

    def __init__(self, log_path: str | Path):
        """
        Initialize the report logger.

        Args:
            log_path: Path to the log file (will be created if not exists)
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, entry: ReportLogEntry) -> None:
        """
        Write a report log entry.

        Args:
            entry: ReportLogEntry to write
        """
        record = {
            "timestamp": entry.timestamp.isoformat(),
            "action_type": entry.action_type.value,
            "coin": entry.coin,
            "details": entry.details,
        }

        with open(self.log_path, "a") as f:
            f.write(json.dumps(record) + "\n")

    def log_config_loaded(self, config: ReportConfig, config_path: str) -> None:
        """Log configuration loading. API keys are never written."""
        details = {
            "config_path": config_path,
            "crypto_id": config.crypto_id,
            "local_currency": config.local_currency,
            "to_email": config.to_email,
        }
        self.log(ReportLogEntry.create(ActionType.CONFIG_LOADED, config.coin, details))

    def log_rates_fetched(self, coin: str, rates: ExchangeRates) -> None:
        details = {
            "crypto_usd": rates.crypto_usd,
            "usd_local": rates.usd_local,
        }
        self.log(ReportLogEntry.create(ActionType.RATES_FETCHED, coin, details))

    def log_credits_fetched(self, coin: str, credits: RecentCredits) -> None:
        details = {"amount": credits.amount, "date": credits.date}
        self.log(ReportLogEntry.create(ActionType.CREDITS_FETCHED, coin, details))

    def log_report_sent(
        self,
        coin: str,
        method: str,
        values: dict[str, float],
        status_code: Optional[int],
    ) -> None:
        """
        Log a report delivery attempt.

        Args:
            coin: Coin the report covers
            method: Report method tag
            values: Mined and converted amounts included in the report
            status_code: Email provider status code (None if the provider gave none)
        """
        details = {
            "method": method,
            "values": values,
            "status_code": status_code,
        }
        self.log(ReportLogEntry.create(ActionType.REPORT_SENT, coin, details))

    def read_log(self) -> list[ReportLogEntry]:
        """
        Read all entries from the log file.

        Returns:
            List of ReportLogEntry objects
        """
        if not self.log_path.exists():
            return []

        entries = []
        with open(self.log_path, "r") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                entries.append(
                    ReportLogEntry(
                        timestamp=datetime.fromisoformat(record["timestamp"]),
                        action_type=ActionType(record["action_type"]),
                        coin=record.get("coin"),
                        details=record.get("details", {}),
                    )
                )

        return entries

    def filter_by_action_type(self, action_type: ActionType) -> list[ReportLogEntry]:
        """Get log entries of a specific action type."""
        return [e for e in self.read_log() if e.action_type == action_type]


def get_logger(log_path: Optional[str | Path]) -> Optional[ReportLogger]:
    """Return a ReportLogger for log_path, or None when logging is off."""
    if not log_path:
        return None
    return ReportLogger(log_path)
