"""
Data providers for pool statistics and exchange rates.

Every provider performs single synchronous HTTP round-trips and raises
ProviderError on any failure.
"""

from mining_reports.data.providers.base import ProviderError, get_json
from mining_reports.data.providers.pool import MiningPoolClient
from mining_reports.data.providers.rates import (
    fetch_crypto_usd,
    fetch_exchange_rates,
    fetch_usd_local,
)

__all__ = [
    "ProviderError",
    "get_json",
    "MiningPoolClient",
    "fetch_crypto_usd",
    "fetch_exchange_rates",
    "fetch_usd_local",
]
