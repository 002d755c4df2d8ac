"""
Automated mining reports for cryptocurrency mining farms.

ReportManager ties the pieces together: it loads configuration, caches
exchange rates for its lifetime, pulls credit figures from the pool and
mails the converted amounts, giving farm operators figures they can
file with their books.
"""

import logging
from pathlib import Path
from typing import Optional

from python_http_client.exceptions import HTTPError

from mining_reports.config import load_config_from_file
from mining_reports.data.providers.pool import MiningPoolClient
from mining_reports.data.providers.rates import fetch_exchange_rates
from mining_reports.email_reports.generator import generate_24_hour_email
from mining_reports.email_reports.sender import SUCCESS_STATUS, EmailSender
from mining_reports.logging import ReportLogger, get_logger
from mining_reports.models import (
    EmailRequest,
    ExchangeRates,
    RecentCredits,
    ReportConfig,
    ReportMethod,
)


logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Base class for report dispatch failures."""
    pass


class UnsupportedMethodError(ReportError):
    """Raised when a report method is outside the allowed set."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(
            f"invalid method {method!r}, must be one of {ReportMethod.allowed()}"
        )


class MethodNotImplementedError(ReportError):
    """Raised for report methods that are recognized but not built yet."""

    def __init__(self, method: str):
        self.method = method
        super().__init__("not yet supported")


class EmailDeliveryError(ReportError):
    """Raised when the email provider does not accept a report."""

    def __init__(self, status_code: Optional[int], message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(
            message
            or f"unacceptable return code, expected {SUCCESS_STATUS} got {status_code}"
        )


class ReportManager:
    """
    Orchestrates one report generation-and-delivery cycle.

    Rates are fetched once at construction and never refreshed. A manager
    is either fully constructed or construction raises.
    """

    def __init__(
        self,
        config: ReportConfig,
        sender: Optional[EmailSender] = None,
        report_logger: Optional[ReportLogger] = None,
    ):
        """
        Initialize the manager and fetch exchange rates.

        Args:
            config: Report configuration
            sender: Email sender (defaults to one built from the config key)
            report_logger: Report log (defaults to config.log_path, if set)

        Raises:
            ProviderError: If either exchange rate cannot be fetched
        """
        self.config = config
        self.pool = MiningPoolClient(config)
        self.report_logger = report_logger or get_logger(config.log_path)

        self.rates: ExchangeRates = fetch_exchange_rates(config)
        if self.report_logger:
            self.report_logger.log_rates_fetched(config.coin, self.rates)

        self.sender = sender or EmailSender(config.sendgrid_api_key)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        sender: Optional[EmailSender] = None,
    ) -> "ReportManager":
        """
        Build a manager from a configuration file.

        Raises:
            ConfigurationError: If the configuration cannot be loaded
            ProviderError: If either exchange rate cannot be fetched
        """
        config = load_config_from_file(path)
        report_logger = get_logger(config.log_path)
        if report_logger:
            report_logger.log_config_loaded(config, str(path))
        return cls(config, sender=sender, report_logger=report_logger)

    @property
    def crypto_usd(self) -> float:
        return self.rates.crypto_usd

    @property
    def usd_local(self) -> float:
        return self.rates.usd_local

    def create_report_and_send(self, method: str) -> None:
        """
        Create and send a mining report.

        Args:
            method: One of ReportMethod.allowed()

        Raises:
            UnsupportedMethodError: For methods outside the allowed set
            MethodNotImplementedError: For the "credit" method
            ProviderError: If pool data cannot be fetched
            EmailDeliveryError: If the provider rejects the email
        """
        try:
            report_method = ReportMethod(method)
        except ValueError:
            raise UnsupportedMethodError(method) from None

        if report_method is ReportMethod.CREDITS:
            raise MethodNotImplementedError(method)

        credits = self.get_recent_credits_24hours()
        usd_value = self.rates.to_usd(credits.amount)
        local_value = self.rates.to_local(usd_value)

        values = {"mined": credits.amount, "usd": usd_value, "local": local_value}
        try:
            status_code = self.send_24_hour_email(credits.amount, usd_value, local_value)
        except EmailDeliveryError as e:
            self._log_report_sent(method, values, e.status_code)
            raise
        self._log_report_sent(method, values, status_code)

        if status_code != SUCCESS_STATUS:
            raise EmailDeliveryError(status_code)

        logger.info("24 hour report for %s delivered", self.config.coin)

    def _log_report_sent(self, method: str, values: dict[str, float], status_code: Optional[int]) -> None:
        if self.report_logger:
            self.report_logger.log_report_sent(self.config.coin, method, values, status_code)

    def get_recent_credits_24hours(self) -> RecentCredits:
        """Get the number of coins mined in the last 24 hour period."""
        credits = self.pool.get_recent_credits_24hours()
        if self.report_logger:
            self.report_logger.log_credits_fetched(self.config.coin, credits)
        return credits

    def get_recent_credits(self) -> list[RecentCredits]:
        """Get coins mined over the pool's recent window, in daily buckets."""
        return self.pool.get_recent_credits()

    def get_dashboard_credits(self) -> tuple[RecentCredits, list[RecentCredits]]:
        """Get the 24 hour credits and the daily history from one pool request."""
        credits, history = self.pool.get_dashboard_credits()
        if self.report_logger:
            self.report_logger.log_credits_fetched(self.config.coin, credits)
        return credits, history

    def render_24_hour_email(self, mined: float, usd_value: float, local_value: float) -> str:
        return generate_24_hour_email(
            crypto_symbol=self.config.crypto_symbol,
            local_currency=self.config.local_currency,
            mined=mined,
            usd_value=usd_value,
            local_value=local_value,
        )

    def send_24_hour_email(self, mined: float, usd_value: float, local_value: float) -> int:
        """
        Send report information for the last 24 hour period.

        Returns:
            Email provider status code
        """
        request = EmailRequest(
            from_name=self.config.from_name,
            from_email=self.config.from_email,
            to_name=self.config.to_name,
            to_email=self.config.to_email,
            subject=self.config.subject,
            content=self.render_24_hour_email(mined, usd_value, local_value),
            content_type="text/html",
        )
        return self._send(request)

    def send_template_email(self, args: dict[str, str]) -> int:
        """
        Send any kind of report email.

        Args:
            args: content, content_type, from_name, from_email, subject,
                to_name and to_email

        Returns:
            Email provider status code
        """
        return self._send(EmailRequest.from_args(args))

    def _send(self, request: EmailRequest) -> int:
        # The SendGrid client raises on 4xx/5xx rather than returning them
        try:
            return self.sender.send(request)
        except HTTPError as e:
            status_code = getattr(e, "status_code", None)
            raise EmailDeliveryError(
                status_code, f"email provider rejected message: {status_code}"
            ) from e
