"""Overpass API client with multi-server failover."""

import logging

import httpx

from destinations.config.defaults import DEFAULT_OVERPASS_ENDPOINTS, DEFAULT_USER_AGENT
from destinations.ingest.failover import BackoffPolicy, FailoverRequester

logger = logging.getLogger(__name__)

SERVICE_NAME = "Place search"


class OverpassClient:
    def __init__(
        self,
        endpoints: list[str] | None = None,
        policy: BackoffPolicy | None = None,
        timeout: float = 35.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.requester = FailoverRequester(
            endpoints or DEFAULT_OVERPASS_ENDPOINTS, policy, service=SERVICE_NAME
        )
        self.timeout = timeout
        self.user_agent = user_agent

    def query(self, ql: str) -> dict:
        """Run an Overpass QL query and return the decoded JSON.

        Raises CollaboratorUnavailable once every endpoint attempt failed.
        """
        headers = {"Content-Type": "text/plain", "User-Agent": self.user_agent}

        def _post(endpoint: str) -> dict:
            resp = httpx.post(endpoint, content=ql, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
            if not isinstance(data, dict):
                raise ValueError(f"unexpected Overpass payload from {endpoint}")
            return data

        return self.requester.call(_post)
