"""
Core data models for the mining report system.

This module defines the data structures shared by the pool client,
the exchange-rate fetchers, the email layer and the report manager.
Everything here lives for a single invocation; nothing is persisted
except report log entries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


DEFAULT_POOL_URL = "https://{coin}.miningpoolhub.com/index.php?page=api&action={action}&api_key={api_key}"
DEFAULT_CRYPTO_RATE_URL = "https://api.coingecko.com/api/v3/simple/price?ids={crypto_id}&vs_currencies=usd"
DEFAULT_FIAT_RATE_URL = "https://free.currencyconverterapi.com/api/v5/convert?q=USD_{currency}&compact=y"


class ReportMethod(Enum):
    """Report types accepted by the dispatch operation."""
    RECENT_CREDITS_24_HOURS = "24hour_credit"
    CREDITS = "credit"

    @classmethod
    def allowed(cls) -> list[str]:
        """Return the allowed method tags in declaration order."""
        return [m.value for m in cls]


class ActionType(Enum):
    """Types of logged actions for the report log."""
    CONFIG_LOADED = "CONFIG_LOADED"
    RATES_FETCHED = "RATES_FETCHED"
    CREDITS_FETCHED = "CREDITS_FETCHED"
    REPORT_SENT = "REPORT_SENT"


@dataclass(frozen=True)
class ReportConfig:
    """
    Configuration for report generation.

    Attributes:
        coin: Pool coin identifier substituted into the URL (e.g. "ethereum")
        api_key: Mining pool API key
        url: Pool URL template with {coin}, {action} and {api_key} placeholders
        sendgrid_api_key: Email provider API key
        crypto_id: Coin id understood by the crypto->USD conversion API
        crypto_symbol: Short label used in report bodies
        local_currency: ISO code of the local fiat currency
        crypto_rate_url: Template for the crypto->USD API ({crypto_id})
        fiat_rate_url: Template for the USD->local API ({currency})
        from_name: Sender display name
        from_email: Sender address
        to_name: Recipient display name
        to_email: Recipient address
        subject: Subject line of the 24-hour report
        log_path: Optional path of the JSONL report log
    """
    coin: str
    api_key: str
    url: str = DEFAULT_POOL_URL
    sendgrid_api_key: str = ""
    crypto_id: str = "ethereum"
    crypto_symbol: str = "ETH"
    local_currency: str = "CAD"
    crypto_rate_url: str = DEFAULT_CRYPTO_RATE_URL
    fiat_rate_url: str = DEFAULT_FIAT_RATE_URL
    from_name: str = "Mining Reports"
    from_email: str = "reports@example.com"
    to_name: str = "Mining Reports"
    to_email: str = "reports@example.com"
    subject: str = "Mining Report"
    log_path: Optional[str] = None


@dataclass(frozen=True)
class ExchangeRates:
    """
    Conversion ratios cached for the lifetime of a manager.

    Attributes:
        crypto_usd: Value of one unit of the mined coin in USD
        usd_local: Value of one USD in the local currency
    """
    crypto_usd: float
    usd_local: float

    def to_usd(self, amount: float) -> float:
        return amount * self.crypto_usd

    def to_local(self, usd_value: float) -> float:
        return usd_value * self.usd_local


@dataclass
class RecentCredits:
    """
    Amount of coin credited by the pool over a reporting window.

    The 24-hour aggregate carries no date; daily buckets do.
    """
    amount: float
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RecentCredits":
        """Build a record from a pool API object, coercing the amount."""
        if not isinstance(raw, dict):
            raise TypeError(f"expected object, got {type(raw).__name__}")
        amount = raw.get("amount", 0)
        if amount is None:
            amount = 0
        record_date = raw.get("date")
        return cls(
            amount=float(amount),
            date=str(record_date) if record_date is not None else None,
        )


@dataclass
class EmailRequest:
    """A single message handed to the email provider."""
    from_name: str
    from_email: str
    to_name: str
    to_email: str
    subject: str
    content: str
    content_type: str = "text/html"

    @classmethod
    def from_args(cls, args: dict[str, str]) -> "EmailRequest":
        """
        Build a request from a flat argument mapping.

        Expected keys: content, content_type, from_name, from_email,
        subject, to_name, to_email. Missing keys become empty strings.
        """
        return cls(
            from_name=args.get("from_name", ""),
            from_email=args.get("from_email", ""),
            to_name=args.get("to_name", ""),
            to_email=args.get("to_email", ""),
            subject=args.get("subject", ""),
            content=args.get("content", ""),
            content_type=args.get("content_type", "") or "text/html",
        )


@dataclass
class ReportLogEntry:
    """
    A single entry in the append-only report log.

    Attributes:
        timestamp: When the action occurred
        action_type: Type of action performed
        coin: Coin the action relates to (if applicable)
        details: Action-specific details
    """
    timestamp: datetime
    action_type: ActionType
    coin: Optional[str]
    details: dict = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        coin: Optional[str],
        details: dict,
    ) -> "ReportLogEntry":
        """Factory method to create a log entry with current timestamp."""
        return cls(
            timestamp=datetime.now(),
            action_type=action_type,
            coin=coin,
            details=details,
        )
