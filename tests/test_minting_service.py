"""Tests for the minting service clients."""

import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from core.exceptions import MintingError
from services.minting_service import HttpMintingService, InMemoryMintingService


async def start_server(handler) -> test_utils.TestServer:
    app = web.Application()
    app.router.add_post("/receipts", handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    return server


@pytest.mark.asyncio
async def test_in_memory_receipts_are_sequential():
    minting = InMemoryMintingService("handle", first_receipt_id=5)

    assert await minting.mint_receipt("ipfs://a") == 5
    assert await minting.mint_receipt("ipfs://b") == 6
    assert minting.minted == {5: "ipfs://a", 6: "ipfs://b"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_http_minting_returns_receipt_id():
    received = []

    async def handler(request):
        received.append(await request.json())
        return web.json_response({"receipt_id": 17})

    server = await start_server(handler)
    client = HttpMintingService(str(server.make_url("/")), "raffle-receipts")
    try:
        assert await client.mint_receipt("ipfs://1") == 17
    finally:
        await client.close()
        await server.close()

    assert received == [{"uri": "ipfs://1", "handle": "raffle-receipts"}]


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        lambda: web.Response(status=503, text="maintenance"),
        lambda: web.json_response({"id": 1}),
        lambda: web.json_response({"receipt_id": "17"}),
        lambda: web.Response(text="not json", content_type="application/json"),
    ],
)
async def test_http_minting_rejects_bad_replies(response):
    async def handler(request):
        return response()

    server = await start_server(handler)
    client = HttpMintingService(str(server.make_url("/")), "raffle-receipts")
    try:
        with pytest.raises(MintingError):
            await client.mint_receipt("ipfs://1")
    finally:
        await client.close()
        await server.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_http_minting_times_out():
    async def handler(request):
        await asyncio.sleep(1)
        return web.json_response({"receipt_id": 1})

    server = await start_server(handler)
    client = HttpMintingService(str(server.make_url("/")), "raffle-receipts", timeout=0.1)
    try:
        with pytest.raises(MintingError):
            await client.mint_receipt("ipfs://1")
    finally:
        await client.close()
        await server.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_http_minting_unreachable():
    async def handler(request):
        return web.json_response({"receipt_id": 1})

    server = await start_server(handler)
    url = str(server.make_url("/"))
    await server.close()

    client = HttpMintingService(url, "raffle-receipts")
    try:
        with pytest.raises(MintingError):
            await client.mint_receipt("ipfs://1")
    finally:
        await client.close()
