from __future__ import annotations

import logging

import httpx

from token_list_engine.app.domain.addresses import normalize_address
from token_list_engine.app.domain.chains import ETHEREUM_MAINNET, LINEA_MAINNET
from token_list_engine.app.domain.errors import LogoRateLimitError
from token_list_engine.app.domain.ports.out import LogoURIResolver

logger = logging.getLogger(__name__)

# CoinGecko asset platform ids
_PLATFORMS: dict[int, str] = {
    ETHEREUM_MAINNET.chain_id: "ethereum",
    LINEA_MAINNET.chain_id: "linea",
}


class CoinGeckoLogoURIResolver(LogoURIResolver):
    """
    Looks up `image.large` from CoinGecko's contract endpoint:

        GET {base_url}/{platform}/contract/{address_lowercase}

    A 429 answer is raised as LogoRateLimitError so the caller can stop and
    retry later; every other failure is logged and treated as "no logo".
    """

    def __init__(self, *, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def resolve(
        self,
        *,
        chain_id: int,
        address: str,
    ) -> str | None:
        platform = _PLATFORMS.get(chain_id)
        if platform is None:
            logger.warning("No CoinGecko platform for chain", extra={"chain_id": chain_id})
            return None

        normalized_address = normalize_address(address)
        url = f"{self._base_url}/{platform}/contract/{normalized_address.lower()}"

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 429:
                logger.warning("CoinGecko rate limit reached")
                raise LogoRateLimitError("CoinGecko rate limit reached") from exc
            logger.warning(
                "Error fetching logoURI from CoinGecko",
                extra={
                    "address": normalized_address,
                    "status_code": exc.response.status_code,
                },
            )
            return None
        except httpx.HTTPError as exc:
            logger.warning(
                "Error fetching logoURI from CoinGecko",
                extra={"address": normalized_address, "error": repr(exc)},
            )
            return None

        try:
            return response.json()["image"]["large"] or None
        except (ValueError, KeyError, TypeError):
            logger.warning(
                "Unexpected CoinGecko payload, no logo",
                extra={"address": normalized_address},
            )
            return None
