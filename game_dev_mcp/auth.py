"""
Authentication handling for Linear
Supports OAuth access tokens and personal API keys
"""
import logging
import os
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Optional

import httpx

from .constants import LINEAR_API_URL, RequestDefaults
from .log_sanitizer import safe_log_error

logger = logging.getLogger(__name__)


VIEWER_QUERY = "query Viewer { viewer { id name email } }"


class LinearAuth:
    """
    Handles authentication to Linear using, in order of preference:
    1. OAuth access token (LINEAR_OAUTH_TOKEN)
    2. Personal API key (LINEAR_API_KEY)

    The resulting httpx.AsyncClient is shared by every service.
    """

    def __init__(
        self,
        api_url: str = LINEAR_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize authentication handler

        Args:
            api_url: Linear GraphQL endpoint
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url
        self.client: Optional[httpx.AsyncClient] = None
        self.viewer: Optional[dict] = None
        self._transport = transport
        self._auth_method = None

        # Auth failure tracking
        self._auth_failures = defaultdict(int)
        self._auth_failure_timestamps = deque(maxlen=100)
        self._last_auth_attempt = None
        self._last_auth_success = None

    async def initialize(self):
        """Find working credentials and open the HTTP client"""
        auth_methods = [
            self._try_oauth_token,
            self._try_api_key,
        ]

        self._last_auth_attempt = datetime.now(timezone.utc)

        for auth_method in auth_methods:
            try:
                self.client = await auth_method()
                if self.client:
                    self._last_auth_success = datetime.now(timezone.utc)
                    logger.info(
                        f"Authenticated to Linear using {self._auth_method} "
                        f"as {self.viewer.get('name') if self.viewer else 'unknown user'}"
                    )
                    return
            except Exception as e:
                method_name = auth_method.__name__
                self._auth_failures[method_name] += 1
                self._auth_failure_timestamps.append({
                    'method': method_name,
                    'timestamp': datetime.now(timezone.utc).isoformat(),
                    'error_type': type(e).__name__
                })

                logger.warning(safe_log_error(e, method_name))
                continue

        raise ValueError(
            "Failed to authenticate to Linear. Please configure one of:\n"
            "1. OAuth access token (LINEAR_OAUTH_TOKEN)\n"
            "2. Personal API key (LINEAR_API_KEY)"
        )

    async def _try_oauth_token(self) -> Optional[httpx.AsyncClient]:
        """
        Attempt authentication using an OAuth access token
        Requires environment variable: LINEAR_OAUTH_TOKEN
        """
        token = os.getenv("LINEAR_OAUTH_TOKEN")
        if not token:
            raise ValueError("LINEAR_OAUTH_TOKEN environment variable not set")

        client = self._build_client(f"Bearer {token}")
        await self._verify(client)

        self._auth_method = "OAuth Access Token"
        return client

    async def _try_api_key(self) -> Optional[httpx.AsyncClient]:
        """
        Attempt authentication using a personal API key
        Requires environment variable: LINEAR_API_KEY

        Personal API keys are sent without the Bearer prefix.
        """
        api_key = os.getenv("LINEAR_API_KEY")
        if not api_key:
            raise ValueError("LINEAR_API_KEY environment variable not set")

        client = self._build_client(api_key)
        await self._verify(client)

        self._auth_method = "Personal API Key"
        return client

    def _build_client(self, authorization: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "Authorization": authorization,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(RequestDefaults.TIMEOUT_SECONDS),
            transport=self._transport,
        )

    async def _verify(self, client: httpx.AsyncClient):
        """Run the viewer query; close the client if the credentials are rejected"""
        try:
            response = await client.post(self.api_url, json={"query": VIEWER_QUERY})
            response.raise_for_status()
            body = response.json()
            if body.get("errors"):
                raise ValueError(f"Linear rejected credentials: {body['errors'][0].get('message')}")
            self.viewer = (body.get("data") or {}).get("viewer")
        except Exception:
            await client.aclose()
            raise

    def get_client(self) -> httpx.AsyncClient:
        """
        Get the authenticated HTTP client

        Returns:
            The shared httpx.AsyncClient
        """
        if not self.client:
            raise RuntimeError("Not authenticated. Call initialize() first.")
        return self.client

    async def close(self):
        """Clean up resources"""
        if self.client:
            await self.client.aclose()
        self.client = None

    def get_auth_info(self) -> dict:
        """Get information about current authentication"""
        return {
            "method": self._auth_method,
            "api_url": self.api_url,
            "authenticated": self.client is not None,
            "user": self.viewer.get("name") if self.viewer else None
        }

    def get_auth_failure_stats(self) -> dict:
        """
        Get authentication failure statistics.

        Returns:
            Dictionary with failure counts, timestamps, and status
        """
        recent_failures = list(self._auth_failure_timestamps)[-10:]

        return {
            "total_failures_by_method": dict(self._auth_failures),
            "total_failures": sum(self._auth_failures.values()),
            "recent_failures": recent_failures,
            "last_auth_attempt": self._last_auth_attempt.isoformat() if self._last_auth_attempt else None,
            "last_auth_success": self._last_auth_success.isoformat() if self._last_auth_success else None,
            "currently_authenticated": self.client is not None
        }
