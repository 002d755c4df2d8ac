"""
Pytest fixtures for the mining report tests.

Provides sample configuration, canned API payloads and an HTTP mock
that routes requests to the right payload by URL.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml

from mining_reports.email_reports.sender import EmailSender
from mining_reports.models import ReportConfig


@pytest.fixture(autouse=True)
def clean_api_key_env(monkeypatch):
    """Keep API keys from the developer's environment out of the tests."""
    monkeypatch.delenv("POOL_API_KEY", raising=False)
    monkeypatch.delenv("SENDGRID_API_KEY", raising=False)


@pytest.fixture
def sample_config() -> ReportConfig:
    """Create a sample report configuration for testing."""
    return ReportConfig(
        coin="ethereum",
        api_key="test-api-key",
        sendgrid_api_key="test-sendgrid-key",
        crypto_id="ethereum",
        crypto_symbol="ETH",
        local_currency="CAD",
        from_name="Pool Reports",
        from_email="pool@example.com",
        to_name="Accounting",
        to_email="accounting@example.com",
        subject="Ethereum Mining Report",
    )


@pytest.fixture
def sample_config_dict() -> dict:
    """Raw configuration as it would appear in a YAML file."""
    return {
        "coin": "ethereum",
        "api_key": "file-api-key",
        "url": "https://{coin}.miningpoolhub.com/index.php?page=api&action={action}&api_key={api_key}",
        "sendgrid_api_key": "file-sendgrid-key",
        "local_currency": "cad",
        "to_email": "accounting@example.com",
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    """Write sample_config_dict to a YAML file."""
    path = tmp_path / "report.yaml"
    with open(path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return path


# =============================================================================
# API payloads
# =============================================================================


@pytest.fixture
def dashboard_response() -> dict:
    """
    Sample MiningPoolHub getdashboarddata response.

    Format matches index.php?page=api&action=getdashboarddata.
    """
    return {
        "getdashboarddata": {
            "version": "1.0.0",
            "runtime": 15.21,
            "data": {
                "raw": {"personal": {"hashrate": 180.2}},
                "recent_credits_24hours": {"amount": 0.0123},
                "recent_credits": [
                    {"date": "2018-05-20", "amount": 0.0123},
                    {"date": "2018-05-19", "amount": 0.0119},
                    {"date": "2018-05-18", "amount": 0.0131},
                ],
            },
        }
    }


@pytest.fixture
def crypto_rate_response() -> dict:
    """CoinGecko simple price response."""
    return {"ethereum": {"usd": 2047.31}}


@pytest.fixture
def fiat_rate_response() -> dict:
    """currencyconverterapi compact response."""
    return {"USD_CAD": {"val": 1.362}}


def make_response(payload, status_code: int = 200) -> MagicMock:
    """Build a mocked requests.Response returning payload."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def json_response():
    """Factory for mocked JSON responses."""
    return make_response


@pytest.fixture
def mock_http(dashboard_response, crypto_rate_response, fiat_rate_response):
    """
    Patch requests.get, routing each URL to its canned payload.

    Tests can swap payloads through mock_http.payloads.
    """
    payloads = {
        "miningpoolhub": dashboard_response,
        "coingecko": crypto_rate_response,
        "currencyconverterapi": fiat_rate_response,
    }

    def route(url, *args, **kwargs):
        for marker, payload in payloads.items():
            if marker in url:
                return make_response(payload)
        raise AssertionError(f"unexpected URL {url}")

    with patch("requests.get") as mock_get:
        mock_get.side_effect = route
        mock_get.payloads = payloads
        yield mock_get


@pytest.fixture
def mock_sender() -> MagicMock:
    """EmailSender stand-in that reports a 202 for every send."""
    sender = MagicMock(spec=EmailSender)
    sender.send.return_value = 202
    return sender
