from __future__ import annotations

import asyncio
import logging
import re
from typing import Mapping

from web3 import AsyncHTTPProvider, AsyncWeb3

from token_list_engine.app.config import settings
from token_list_engine.app.domain.chains import ETHEREUM_MAINNET, LINEA_MAINNET, get_chain

logger = logging.getLogger(__name__)

# Tried in order after the configured URL
PUBLIC_ENDPOINTS: dict[int, list[str]] = {
    ETHEREUM_MAINNET.chain_id: [
        "https://eth.llamarpc.com",
        "https://rpc.ankr.com/eth",
        "https://ethereum.publicnode.com",
        "https://1rpc.io/eth",
    ],
    LINEA_MAINNET.chain_id: [
        "https://rpc.linea.build",
        "https://linea.drpc.org",
        "https://1rpc.io/linea",
    ],
}

_URL_TAIL_RE = re.compile(r"/[^/]*$")


def _mask_url(url: str) -> str:
    # API keys usually live in the last path segment
    return _URL_TAIL_RE.sub("/***", url)


def create_async_web3(url: str, *, timeout: float) -> AsyncWeb3:
    return AsyncWeb3(
        AsyncHTTPProvider(
            url,
            request_kwargs={"timeout": timeout},
        )
    )


async def connect_async_web3(
    *,
    chain_id: int,
    configured_url: str | None,
    timeout: float,
) -> AsyncWeb3:
    """
    Return the first endpoint that answers eth_chainId with the expected id.

    Priority: configured URL (env) > public endpoints.
    """
    chain = get_chain(chain_id)
    endpoints = ([configured_url] if configured_url else []) + PUBLIC_ENDPOINTS[chain.chain_id]

    for url in endpoints:
        w3 = create_async_web3(url, timeout=timeout)
        try:
            remote_chain_id = await w3.eth.chain_id
        except Exception as error:
            logger.warning(
                "Failed to connect to %s endpoint",
                chain.name,
                extra={"url": _mask_url(url), "error": repr(error)},
            )
            await w3.provider.disconnect()
            continue

        if remote_chain_id != chain.chain_id:
            logger.warning(
                "Endpoint serves the wrong chain, skip",
                extra={"url": _mask_url(url), "remote_chain_id": remote_chain_id},
            )
            await w3.provider.disconnect()
            continue

        logger.info("Successfully connected to %s", chain.name, extra={"url": _mask_url(url)})
        return w3

    raise ConnectionError(
        f"Unable to connect to any {chain.name} provider. "
        "Check your network connection or provide a valid RPC URL."
    )


async def create_chain_clients() -> dict[int, AsyncWeb3]:
    """Connect both bridged chains concurrently, keyed by chain id."""
    logger.info("Initializing clients with fallback chain...")
    l1_w3, l2_w3 = await asyncio.gather(
        connect_async_web3(
            chain_id=ETHEREUM_MAINNET.chain_id,
            configured_url=settings.rpc_url(ETHEREUM_MAINNET.chain_id),
            timeout=settings.rpc_timeout_seconds,
        ),
        connect_async_web3(
            chain_id=LINEA_MAINNET.chain_id,
            configured_url=settings.rpc_url(LINEA_MAINNET.chain_id),
            timeout=settings.rpc_timeout_seconds,
        ),
    )
    return {ETHEREUM_MAINNET.chain_id: l1_w3, LINEA_MAINNET.chain_id: l2_w3}


async def close_chain_clients(clients: Mapping[int, AsyncWeb3]) -> None:
    """Close the HTTP sessions held by the providers of `clients`."""
    for w3 in clients.values():
        await w3.provider.disconnect()
