"""HTTP client for the Google Elevation API."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


class ElevationLookupError(RuntimeError):
    """The elevation service returned no usable elevation for a location."""


class ElevationClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise ValueError("Google Maps API key not configured. Set POLEGUARD_GOOGLE_MAPS_API_KEY.")
        self.base_url = base_url or settings.elevation_api_url
        self.timeout = timeout if timeout is not None else settings.elevation_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.elevation_max_retries
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None else settings.elevation_backoff_seconds
        )
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        """Create a client per lookup; lookups run on worker threads."""
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        )

    def _parse(self, data: dict) -> float:
        api_status = data.get("status")
        if api_status != "OK":
            raise ElevationLookupError(
                f"Elevation API returned status {api_status or 'UNKNOWN'}: "
                f"{data.get('error_message', 'No error message')}"
            )
        results = data.get("results") or []
        if not results or results[0].get("elevation") is None:
            raise ElevationLookupError("Elevation API returned no elevation data")
        return float(results[0]["elevation"])

    def get_elevation(self, latitude: float, longitude: float) -> float:
        """Return ground elevation in meters for a coordinate."""
        params = {"locations": f"{latitude},{longitude}", "key": self.api_key}
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(self.base_url, params=params)
                    response.raise_for_status()
                    return self._parse(response.json())
                except httpx.HTTPStatusError as exc:
                    if exc.response.status_code < 500:
                        logger.error(
                            f"Elevation API request failed with status {exc.response.status_code}: "
                            f"{exc.response.text[:200]}"
                        )
                        raise ElevationLookupError(
                            f"Elevation API request failed with status {exc.response.status_code}"
                        ) from exc
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ElevationLookupError(
                            f"Elevation API unavailable after {self.max_retries} retries"
                        ) from exc
                    time.sleep(self.backoff_seconds * attempt)
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Elevation request failed after {self.max_retries} retries: {exc}")
                        raise ElevationLookupError(f"Failed to reach elevation service: {exc}") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(
                        f"Elevation request error, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {exc}"
                    )
                    time.sleep(wait_time)
                except ValueError as exc:
                    raise ElevationLookupError(f"Elevation API returned invalid JSON: {exc}") from exc
        finally:
            client.close()


def check_health(client: ElevationClient | None = None) -> bool:
    """Return True if a lookup for a fixed point succeeds."""
    try:
        elevation_client = client or ElevationClient()
        elevation_client.get_elevation(0.0, 0.0)
        return True
    except (ValueError, ElevationLookupError) as exc:
        logger.warning(f"Elevation health check failed: {exc}")
        return False
