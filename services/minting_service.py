"""Clients for the minting service that issues a receipt per purchased ticket."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional, Protocol

import aiohttp

from core import get_logger, MintingDefaults
from core.exceptions import MintingError

logger = get_logger(__name__)


class MintingService(Protocol):
    """Turns a ticket URI into a durable receipt identifier."""

    handle: str

    async def mint_receipt(self, uri: str) -> int:
        ...


class InMemoryMintingService:
    """Issues sequential receipt ids without leaving the process."""

    def __init__(self, handle: str, first_receipt_id: int = MintingDefaults.FIRST_RECEIPT_ID) -> None:
        self.handle = handle
        self._next_id = first_receipt_id
        self.minted: Dict[int, str] = {}
        self._lock = asyncio.Lock()

    async def mint_receipt(self, uri: str) -> int:
        async with self._lock:
            receipt_id = self._next_id
            self._next_id += 1
            self.minted[receipt_id] = uri
        logger.debug(f"Minted receipt {receipt_id} for {uri}")
        return receipt_id


class HttpMintingService:
    """Minting service reached over HTTP.

    ``POST {base_url}/receipts`` with ``{"uri": ..., "handle": ...}`` must
    answer with ``{"receipt_id": <int>}``.
    """

    def __init__(
        self,
        base_url: str,
        handle: str,
        timeout: float = MintingDefaults.TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Root URL of the minting service
            handle: Collection handle sent along with every request
            timeout: Total request timeout in seconds
            session: Optional shared session; created lazily otherwise
        """
        self.base_url = base_url.rstrip("/")
        self.handle = handle
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def mint_receipt(self, uri: str) -> int:
        """Request a receipt for ``uri``.

        Raises:
            MintingError: On transport failure, timeout, error status or malformed reply
        """
        url = f"{self.base_url}{MintingDefaults.RECEIPTS_PATH}"
        session = self._get_session()
        try:
            async with session.post(
                url, json={"uri": uri, "handle": self.handle}, timeout=self.timeout
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise MintingError(
                        f"Minting service answered {response.status}: {body[:200]}"
                    )
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise MintingError(f"Minting service timed out after {self.timeout.total}s") from e
        except aiohttp.ClientError as e:
            raise MintingError(f"Minting service unreachable: {e}") from e
        except ValueError as e:
            raise MintingError(f"Minting service sent invalid JSON: {e}") from e

        receipt_id = data.get("receipt_id") if isinstance(data, dict) else None
        if not isinstance(receipt_id, int) or isinstance(receipt_id, bool):
            raise MintingError(f"Minting service returned no receipt id: {data!r}")

        logger.debug(f"Minted receipt {receipt_id} for {uri} via {url}")
        return receipt_id

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
