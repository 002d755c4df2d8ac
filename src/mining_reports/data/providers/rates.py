"""
Exchange-rate fetchers.

Two independent conversion APIs are queried once per manager:
- crypto->USD, CoinGecko simple price format: {"ethereum": {"usd": 1234.5}}
- USD->local, currencyconverterapi compact format: {"USD_CAD": {"val": 1.35}}
"""

import logging
from typing import Any

from mining_reports.data.providers.base import ProviderError, get_json
from mining_reports.models import ExchangeRates, ReportConfig


logger = logging.getLogger(__name__)


def _as_rate(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise ProviderError(f"Invalid {label} rate: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ProviderError(f"Invalid {label} rate: {value!r}") from e


def fetch_crypto_usd(config: ReportConfig) -> float:
    """
    Fetch the USD value of one unit of the configured coin.

    Raises:
        ProviderError: If the request fails or the rate is missing
    """
    url = config.crypto_rate_url.format(crypto_id=config.crypto_id)
    body = get_json(url)

    entry = body.get(config.crypto_id) if isinstance(body, dict) else None
    if not isinstance(entry, dict) or "usd" not in entry:
        raise ProviderError(f"No USD price for {config.crypto_id} in response")

    rate = _as_rate(entry["usd"], f"{config.crypto_id}->USD")
    logger.info("%s->USD rate: %s", config.crypto_symbol, rate)
    return rate


def fetch_usd_local(config: ReportConfig) -> float:
    """
    Fetch the local-currency value of one USD.

    Accepts both {"USD_CAD": {"val": 1.35}} and {"USD_CAD": 1.35}.

    Raises:
        ProviderError: If the request fails or the rate is missing
    """
    pair = f"USD_{config.local_currency}"
    url = config.fiat_rate_url.format(currency=config.local_currency)
    body = get_json(url)

    if not isinstance(body, dict) or pair not in body:
        raise ProviderError(f"No {pair} rate in response")

    value = body[pair]
    if isinstance(value, dict):
        if "val" not in value:
            raise ProviderError(f"No {pair} rate in response")
        value = value["val"]

    rate = _as_rate(value, pair)
    logger.info("%s rate: %s", pair, rate)
    return rate


def fetch_exchange_rates(config: ReportConfig) -> ExchangeRates:
    """Fetch both ratios; either failure aborts."""
    return ExchangeRates(
        crypto_usd=fetch_crypto_usd(config),
        usd_local=fetch_usd_local(config),
    )
