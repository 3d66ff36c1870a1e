"""Open-Meteo forecast API client: one batched request for many locations."""

import logging
import time

import httpx

from destinations.config.defaults import DEFAULT_OPEN_METEO_URL, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,weathercode"
HOURLY_FIELDS = "temperature_2m,weathercode"


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = DEFAULT_OPEN_METEO_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_forecasts(
        self, coords: list[tuple[float, float]], start_date: str, end_date: str
    ) -> list[dict]:
        """Fetch daily + hourly forecasts for every (lat, lon) in one call.

        Returns one payload per coordinate, in request order. Retries on
        503/429 and transport errors with exponential backoff.
        """
        if not coords:
            return []

        params = {
            "latitude": ",".join(f"{lat:.4f}" for lat, _ in coords),
            "longitude": ",".join(f"{lon:.4f}" for _, lon in coords),
            "start_date": start_date,
            "end_date": end_date,
            "daily": DAILY_FIELDS,
            "hourly": HOURLY_FIELDS,
            "timezone": "auto",
        }
        headers = {"User-Agent": self.user_agent}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    self.base_url, params=params, headers=headers, timeout=self.timeout
                )
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Open-Meteo returned %d, retrying in %.1fs (attempt %d/%d)",
                        resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return _as_payload_list(resp.json())
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Open-Meteo request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        raise RuntimeError("unreachable: retry loop exited without result")


def _as_payload_list(data: object) -> list[dict]:
    # A single location comes back as an object, several as a list.
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [d if isinstance(d, dict) else {} for d in data]
    raise ValueError(f"unexpected Open-Meteo payload type {type(data).__name__}")
