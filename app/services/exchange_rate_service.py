"""
==============================================================================
Exchange Rate Service Module
==============================================================================

Fetches the current EUR to USD mid rate from the external rate list.

Response format (list, first entry used):
----------------------------------------
    [
        {
            "broj_tecajnice": "76",
            "datum_primjene": "2025-04-22",
            "drzava": "SAD",
            "drzava_iso": "USA",
            "kupovni_tecaj": "1,1325",
            "prodajni_tecaj": "1,1291",
            "sifra_valute": "840",
            "srednji_tecaj": "1,1308",
            "valuta": "USD"
        }
    ]

Failure Policy:
--------------
The USD price is a best-effort enrichment. Any failure (network error,
timeout, non-200 status, empty list, malformed rate) is logged and the
neutral rate 1.0 is returned. There is no retry and no caching: callers
fetch once per operation and reuse the value for every item.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

import httpx
from pydantic import TypeAdapter

from app.config import get_settings
from app.core import exceptions
from app.schemas.exchange_rate import ExchangeRateRecord


# Module logger
logger = logging.getLogger(__name__)

FALLBACK_RATE = 1.0

_records_adapter = TypeAdapter(List[ExchangeRateRecord])


class ExchangeRateService:
    """
    Client for the EUR exchange rate list.

    Attributes:
        _url: Rate list endpoint
        _client: httpx client used for the request
        _owns_client: Whether ``close`` should close the client

    Example:
        >>> service = ExchangeRateService()
        >>> rate = service.fetch_usd_rate()
        >>> service.close()
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> None:
        """
        Initialize the exchange rate service.

        Args:
            client: Optional httpx client (a new one is created if None)
            url: Rate list endpoint (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        settings = get_settings()
        self._url = url or settings.exchange_rate_url
        self._timeout = timeout or settings.exchange_rate_timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self._timeout)

    @property
    def url(self) -> str:
        """Configured rate list endpoint."""
        return self._url

    def fetch_usd_rate(self) -> float:
        """
        Fetch the EUR to USD mid rate.

        Returns:
            The current rate, or 1.0 if it could not be obtained
        """
        logger.info("Finding USD rate.")

        try:
            rate = self._request_rate()
            logger.info(f"Found USD rate. Rate: {rate}")
            return rate
        except Exception as e:
            logger.error(f"Error finding USD rate: {e}")

        logger.info("USD rate was not found. Defaulting to 1.")
        return FALLBACK_RATE

    def _request_rate(self) -> float:
        response = self._client.get(
            self._url,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=self._timeout,
        )

        if response.status_code != httpx.codes.OK:
            raise exceptions.exchange_rate_unavailable(
                f"unexpected status {response.status_code}"
            )

        records = _records_adapter.validate_python(response.json())
        if not records:
            raise exceptions.exchange_rate_unavailable("empty rate list")

        return self.parse_rate(records[0].mid_rate)

    @staticmethod
    def parse_rate(raw: str) -> float:
        """
        Parse a comma-decimal rate such as ``"1,1308"``.

        Raises:
            AppException: EXCHANGE_RATE_UNAVAILABLE if the value is not a positive number
        """
        try:
            rate = float(raw.strip().replace(",", "."))
        except ValueError:
            raise exceptions.exchange_rate_unavailable(f"malformed rate {raw!r}")

        if not math.isfinite(rate) or rate <= 0:
            raise exceptions.exchange_rate_unavailable(f"non-positive rate {raw!r}")

        return rate

    def close(self) -> None:
        """Close the underlying client if this service created it."""
        if self._owns_client:
            self._client.close()
