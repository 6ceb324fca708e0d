"""
API layer for the Open-Meteo weather provider.

Provides the low-level HTTP client and hourly forecast retrieval.
"""

import logging
from typing import Optional

from .client import APIClient
from .forecast import ForecastAPI
from . import helpers


class OpenMeteoClient(ForecastAPI, APIClient):
    """
    Unified API client for Open-Meteo.

    Combines the HTTP session with forecast operations.
    """

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com",
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "ForecastAPI",
    "OpenMeteoClient",
    "helpers",
]
