"""
Shared HTTP client with connection pooling.

One AsyncClient is created lazily per run and reused by the fetcher and
the write-probe, so many targets on the same host share connections.
"""

import asyncio
from typing import Optional
import httpx


class HTTPClientPool:
    """
    Owns the AsyncClient used for a run.

    Usage:
        pool = HTTPClientPool(timeout=6.0)
        client = await pool.get_client()
        response = await client.get(url)
        await pool.close()
    """

    def __init__(
        self,
        timeout: float = 6.0,
        user_agent: str = "",
        verify: bool = False,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: Request timeout in seconds
            user_agent: Default User-Agent header
            verify: Verify TLS certificates
            follow_redirects: Follow HTTP redirects
            transport: Custom transport, mainly for tests
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.verify = verify
        self.follow_redirects = follow_redirects
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        """Get the shared client, creating it on first use."""
        async with self._lock:
            if self._client is None:
                headers = {"User-Agent": self.user_agent} if self.user_agent else {}
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=50,
                        max_connections=100,
                        keepalive_expiry=30.0,
                    ),
                    headers=headers,
                    http2=True,
                    verify=self.verify,
                    follow_redirects=self.follow_redirects,
                    transport=self._transport,
                )
            return self._client

    async def close(self):
        """Close the client if one was created."""
        async with self._lock:
            if self._client:
                await self._client.aclose()
                self._client = None
