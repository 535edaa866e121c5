"""Tests for the anonymous write probe."""

import re

import httpx
import pytest

from osshunter.modules.write_probe import probe_write, random_object_key

BUCKET = "http://a.oss-cn-hangzhou.aliyuncs.com"


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestProbeWrite:
    @pytest.mark.asyncio
    async def test_created_is_writable(self):
        async with make_client(lambda request: httpx.Response(201)) as client:
            result = await probe_write(BUCKET, client)

        assert result.writable is True
        assert result.status_code == 201
        assert result.object_url.startswith(BUCKET + "/")

    @pytest.mark.asyncio
    async def test_ok_is_writable(self):
        async with make_client(lambda request: httpx.Response(200)) as client:
            result = await probe_write(BUCKET, client)

        assert result.writable is True

    @pytest.mark.asyncio
    async def test_forbidden_is_not_writable(self):
        async with make_client(lambda request: httpx.Response(403, text="AccessDenied")) as client:
            result = await probe_write(BUCKET, client)

        assert result.writable is False
        assert result.status_code == 403
        assert result.error == ""

    @pytest.mark.asyncio
    async def test_redirect_is_not_writable(self):
        async with make_client(lambda request: httpx.Response(302, headers={"Location": "/x"})) as client:
            result = await probe_write(BUCKET, client)

        assert result.writable is False

    @pytest.mark.asyncio
    async def test_transport_failure_is_not_writable(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        async with make_client(handler) as client:
            result = await probe_write(BUCKET, client)

        assert result.writable is False
        assert result.status_code is None
        assert "ConnectError" in result.error

    @pytest.mark.asyncio
    async def test_request_shape(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(403)

        async with make_client(handler) as client:
            await probe_write(BUCKET + "/", client, payload_bytes=16)

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "PUT"
        assert request.url.host == "a.oss-cn-hangzhou.aliyuncs.com"
        assert re.fullmatch(r"/[0-9a-f]{16}\.ppa", request.url.path)
        assert request.headers["Content-Type"] == "application/octet-stream"
        assert re.fullmatch(rb"[0-9a-f]{32}", request.content)

    @pytest.mark.asyncio
    async def test_keys_differ_between_attempts(self):
        async with make_client(lambda request: httpx.Response(403)) as client:
            first = await probe_write(BUCKET, client)
            second = await probe_write(BUCKET, client)

        assert first.object_url != second.object_url


class TestRandomObjectKey:
    def test_suffix(self):
        assert random_object_key(".txt").endswith(".txt")

    def test_format(self):
        assert re.fullmatch(r"[0-9a-f]{16}\.ppa", random_object_key())
