from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from token_list_engine.app.domain.models import AbiType, TokenMetadata
from token_list_engine.app.domain.ports.out import Erc20TokenMetadataFetcher

logger = logging.getLogger(__name__)


def current_date() -> date:
    return datetime.now(timezone.utc).date()


async def fetch_token_metadata(
    fetcher: Erc20TokenMetadataFetcher,
    *,
    chain_id: int,
    token_address: str,
) -> TokenMetadata | None:
    """
    Read ERC-20 metadata, retrying once with the bytes32 ABI.

    Legacy tokens (MKR, SAI, ...) predate the string return convention, so a
    failed standard read is not final. Returns None when both variants fail.
    """
    try:
        return await fetcher.fetch(
            chain_id=chain_id,
            token_address=token_address,
            abi_type=AbiType.STANDARD,
        )
    except Exception as error:
        logger.warning(
            "Error fetching token info with ERC20 ABI",
            extra={"chain_id": chain_id, "address": token_address, "error": repr(error)},
        )

    try:
        return await fetcher.fetch(
            chain_id=chain_id,
            token_address=token_address,
            abi_type=AbiType.BYTE32,
        )
    except Exception as error:
        logger.error(
            "Error fetching token info with ERC20 Byte32 ABI",
            extra={"chain_id": chain_id, "address": token_address, "error": repr(error)},
        )
        return None
