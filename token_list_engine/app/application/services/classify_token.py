from __future__ import annotations

import asyncio
import logging

from token_list_engine.app.application.services.token_metadata import fetch_token_metadata
from token_list_engine.app.domain.addresses import RESERVED_STATUS_ADDRESS, normalize_address
from token_list_engine.app.domain.chains import ETHEREUM_MAINNET, get_chain, get_root_chain
from token_list_engine.app.domain.classification import (
    apply_verification,
    bridged_token_address,
    classify_bridged_token_type,
)
from token_list_engine.app.domain.errors import TokenNotFoundError
from token_list_engine.app.domain.models import (
    BridgedVerification,
    NativeVerification,
    RootRef,
    Token,
    TokenMetadata,
    Verification,
)
from token_list_engine.app.domain.ports.out import (
    BridgeMappingResolver,
    Erc20TokenMetadataFetcher,
)

logger = logging.getLogger(__name__)


class TokenClassifier:
    """
    Verifies a single token entry against on-chain state.

    Pipeline:
    - no extension.rootAddress -> native token, only metadata is read,
    - root on Ethereum (token on Linea) -> bridge lookups + metadata run
      concurrently, then the tag set is decided by classify_bridged_token_type;
      a canonical token takes its address from the L2 forward mapping,
    - root on Linea (token on Ethereum) -> the recorded tags are kept as-is,
      only metadata and chain wiring are verified.

    Metadata is read from the token's own contract; if neither ABI variant
    answers, the token is reported as not found.
    """

    def __init__(
        self,
        *,
        metadata_fetcher: Erc20TokenMetadataFetcher,
        mapping_resolver: BridgeMappingResolver,
        reserved_sentinel: str = RESERVED_STATUS_ADDRESS,
    ) -> None:
        self._metadata_fetcher = metadata_fetcher
        self._mapping_resolver = mapping_resolver
        self._reserved_sentinel = reserved_sentinel

    async def verify_token(
        self,
        token: Token,
        *,
        metadata: TokenMetadata | None = None,
    ) -> Token:
        verification = await self.classify(token, metadata=metadata)
        return apply_verification(token, verification)

    async def classify(
        self,
        token: Token,
        *,
        metadata: TokenMetadata | None = None,
    ) -> Verification:
        chain = get_chain(token.chain_id)
        root_chain = get_root_chain(token.chain_id)
        address = normalize_address(token.address)

        if not token.root_address:
            return NativeVerification(
                address=address,
                chain_id=chain.chain_id,
                metadata=metadata or await self._fetch_metadata(token, address),
            )

        root = RootRef(
            chain_id=root_chain.chain_id,
            address=normalize_address(token.root_address),
        )

        if root_chain.chain_id != ETHEREUM_MAINNET.chain_id:
            logger.info(
                "Root chain is not re-verified, keeping recorded token type",
                extra={
                    "token_name": token.name,
                    "chain_id": chain.chain_id,
                    "root_chain_id": root.chain_id,
                    "token_type": [t.value for t in token.token_type],
                },
            )
            return BridgedVerification(
                address=address,
                chain_id=chain.chain_id,
                metadata=metadata or await self._fetch_metadata(token, address),
                root=root,
                token_type=tuple(token.token_type),
            )

        mappings_call = self._mapping_resolver.resolve(
            root_chain_id=root.chain_id,
            root_address=root.address,
            chain_id=chain.chain_id,
            address=address,
        )
        if metadata is None:
            mappings, metadata = await asyncio.gather(
                mappings_call,
                self._fetch_metadata(token, address),
            )
        else:
            mappings = await mappings_call

        token_type = classify_bridged_token_type(
            mappings,
            root_address=root.address,
            previous_types=token.token_type,
            reserved_sentinel=self._reserved_sentinel,
        )
        logger.debug(
            "Token classified",
            extra={"token_name": token.name, "token_type": [t.value for t in token_type]},
        )

        # canonical tokens are identified by the L2 bridge mapping of the root
        verified_address = bridged_token_address(
            mappings,
            token_type=token_type,
            reserved_sentinel=self._reserved_sentinel,
        )

        return BridgedVerification(
            address=verified_address or address,
            chain_id=chain.chain_id,
            metadata=metadata,
            root=root,
            token_type=token_type,
        )

    async def _fetch_metadata(self, token: Token, address: str) -> TokenMetadata:
        metadata = await fetch_token_metadata(
            self._metadata_fetcher,
            chain_id=token.chain_id,
            token_address=address,
        )
        if metadata is None:
            raise TokenNotFoundError(token.name, address, token.chain_id)
        return metadata
