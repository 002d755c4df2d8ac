"""
Data access for the mining report system.
"""

from mining_reports.data.providers import (
    MiningPoolClient,
    ProviderError,
    fetch_exchange_rates,
)

__all__ = [
    "MiningPoolClient",
    "ProviderError",
    "fetch_exchange_rates",
]
