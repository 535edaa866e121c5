"""
Static page fetching.

Every HTTP status counts as a response; only transport failures are
reported, and those as an empty result rather than an exception.
"""

import httpx

from osshunter.core.models import FetchResult


async def fetch_url(url: str, client: httpx.AsyncClient) -> FetchResult:
    """
    Fetch a URL with a single GET.

    Args:
        url: Target URL
        client: Shared AsyncClient (timeout and redirects are configured on it)

    Returns:
        FetchResult with the body, or empty content and the failure reason
    """
    try:
        response = await client.get(url)
    except httpx.TimeoutException as e:
        return FetchResult(url=url, error=f"timeout: {e}")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return FetchResult(url=url, error=f"{type(e).__name__}: {e}")

    return FetchResult(
        url=url,
        content=response.text or "",
        status_code=response.status_code,
    )
