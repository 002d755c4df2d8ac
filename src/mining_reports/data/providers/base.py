"""
Shared HTTP plumbing for data providers.

Every provider call is a single GET returning JSON. Failures are
terminal: there is no retry, and every transport or decode error is
surfaced as a ProviderError chained to the original exception.
"""

import logging
from typing import Any

import requests


logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class ProviderError(Exception):
    """Raised when a data provider encounters an error."""
    pass


def get_json(url: str, timeout: float = REQUEST_TIMEOUT) -> Any:
    """
    Issue one GET request and decode its JSON body.

    Args:
        url: Fully formatted request URL
        timeout: Request timeout in seconds

    Returns:
        Decoded JSON value

    Raises:
        ProviderError: On transport failure, HTTP error status or bad JSON
    """
    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ProviderError(f"Request failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(f"Invalid JSON response: {e}") from e
