from __future__ import annotations

from typing import Protocol

from token_list_engine.app.domain.models import (
    AbiType,
    BridgeMappings,
    TokenList,
    TokenMetadata,
)


class Erc20TokenMetadataFetcher(Protocol):
    """
    Low-level dependency used by the token classifier and the entry builder.

    Implementations perform eth_call against the ERC-20 contract on the given
    chain and return name / symbol / decimals decoded according to `abi_type`.

    Any RPC or decoding failure is raised to the caller, which owns the
    standard -> byte32 fallback.
    """

    async def fetch(
        self,
        *,
        chain_id: int,
        token_address: str,
        abi_type: AbiType,
    ) -> TokenMetadata:
        ...


class BridgeMappingResolver(Protocol):
    """
    Port for the token bridge `nativeToBridgedToken` lookups on both chains.

    Returned addresses are checksum-normalized; the zero address means
    "no mapping".
    """

    async def resolve(
        self,
        *,
        root_chain_id: int,
        root_address: str,
        chain_id: int,
        address: str,
    ) -> BridgeMappings:
        ...


class TokenListStore(Protocol):
    """
    Port for the persisted token list document.

    The document is always read and written as a whole.
    """

    async def read(self) -> TokenList:
        ...

    async def write(self, token_list: TokenList) -> None:
        ...


class LogoURIResolver(Protocol):
    """
    Port for third-party logo lookup, keyed by chain id and token address.

    Returns None when the provider has no logo for the token.
    """

    async def resolve(
        self,
        *,
        chain_id: int,
        address: str,
    ) -> str | None:
        ...
