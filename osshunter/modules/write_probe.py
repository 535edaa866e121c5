"""
Anonymous write test.

Uploads a small random object to a random key under the bucket and
classifies the bucket as writable when the PUT returns a 2xx status.
"""

import secrets

import httpx

from osshunter.core.models import WriteProbeResult


def random_object_key(suffix: str = ".ppa") -> str:
    """Random object name that will not collide with existing objects."""
    return f"{secrets.token_hex(8)}{suffix}"


async def probe_write(
    bucket: str,
    client: httpx.AsyncClient,
    suffix: str = ".ppa",
    payload_bytes: int = 16,
    content_type: str = "application/octet-stream",
) -> WriteProbeResult:
    """
    Try a single unauthenticated PUT against a bucket.

    Args:
        bucket: Bucket URL (scheme and host)
        client: Shared AsyncClient
        suffix: Extension of the test object
        payload_bytes: Number of random bytes in the payload (sent hex-encoded)
        content_type: Content-Type of the upload

    Returns:
        WriteProbeResult; writable only on a 2xx response
    """
    object_url = f"{bucket.rstrip('/')}/{random_object_key(suffix)}"
    payload = secrets.token_hex(payload_bytes)

    try:
        response = await client.put(
            object_url,
            content=payload,
            headers={"Content-Type": content_type},
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return WriteProbeResult(
            bucket=bucket,
            object_url=object_url,
            error=f"{type(e).__name__}: {e}",
        )

    return WriteProbeResult(
        bucket=bucket,
        object_url=object_url,
        writable=200 <= response.status_code < 300,
        status_code=response.status_code,
    )
