"""
Mining pool API client.

Talks to a MiningPoolHub-style API where every response is a JSON
object keyed by the requested action:

    {"getdashboarddata": {"version": "1.0.0", "runtime": 12.3,
                          "data": {"recent_credits_24hours": {...},
                                   "recent_credits": [...]}}}

The top level is untyped, so the action's sub-object is pulled out first
and then shaped into RecentCredits records.
"""

import logging
from typing import Any

from mining_reports.data.providers.base import ProviderError, get_json
from mining_reports.models import RecentCredits, ReportConfig


logger = logging.getLogger(__name__)


class MiningPoolClient:
    """
    Client for the pool's dashboard endpoint.

    The URL template comes from configuration and is formatted per call,
    so the configuration itself is never modified.
    """

    DASHBOARD_ACTION = "getdashboarddata"

    def __init__(self, config: ReportConfig):
        self.config = config

    def format_url(self, action: str) -> str:
        """
        Build the request URL for an action.

        Substitutes the configured coin, the action and the API key into
        the {coin}, {action} and {api_key} placeholders of the template.
        """
        return self.config.url.format(
            coin=self.config.coin,
            action=action,
            api_key=self.config.api_key,
        )

    def get_action_data(self, action: str) -> dict[str, Any]:
        """
        Fetch an action and return the "data" object of its payload.

        Raises:
            ProviderError: On transport failure or an unexpected shape
        """
        body = get_json(self.format_url(action))

        if not isinstance(body, dict) or action not in body:
            raise ProviderError(f"Pool response has no '{action}' section")

        payload = body[action]
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise ProviderError(f"Pool '{action}' section has no data object")

        return payload["data"]

    def get_recent_credits_24hours(self) -> RecentCredits:
        """Get the number of coins credited over the last 24 hours."""
        data = self.get_action_data(self.DASHBOARD_ACTION)
        return self._parse_credits_24hours(data)

    def get_recent_credits(self) -> list[RecentCredits]:
        """
        Get credits over the pool's recent window, one record per day.

        MiningPoolHub reports roughly the last two weeks.
        """
        data = self.get_action_data(self.DASHBOARD_ACTION)
        return self._parse_credit_history(data)

    def get_dashboard_credits(self) -> tuple[RecentCredits, list[RecentCredits]]:
        """Get the 24 hour aggregate and the daily history from a single request."""
        data = self.get_action_data(self.DASHBOARD_ACTION)
        return self._parse_credits_24hours(data), self._parse_credit_history(data)

    def _parse_credits_24hours(self, data: dict[str, Any]) -> RecentCredits:
        if "recent_credits_24hours" not in data:
            raise ProviderError("Pool data has no recent_credits_24hours")

        try:
            credits = RecentCredits.from_dict(data["recent_credits_24hours"])
        except (TypeError, ValueError) as e:
            raise ProviderError(f"Invalid recent_credits_24hours: {e}") from e

        logger.info("Pool credited %s %s in the last 24 hours", credits.amount, self.config.coin)
        return credits

    @staticmethod
    def _parse_credit_history(data: dict[str, Any]) -> list[RecentCredits]:
        raw_credits = data.get("recent_credits")
        if not isinstance(raw_credits, list):
            raise ProviderError("Pool data has no recent_credits list")

        try:
            return [RecentCredits.from_dict(item) for item in raw_credits]
        except (TypeError, ValueError) as e:
            raise ProviderError(f"Invalid recent_credits entry: {e}") from e
