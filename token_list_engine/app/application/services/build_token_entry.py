from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from token_list_engine.app.application.services.classify_token import TokenClassifier
from token_list_engine.app.application.services.token_metadata import (
    current_date,
    fetch_token_metadata,
)
from token_list_engine.app.domain.addresses import normalize_address
from token_list_engine.app.domain.chains import get_chain, get_root_chain
from token_list_engine.app.domain.errors import TokenNotFoundError
from token_list_engine.app.domain.models import Token, TokenExtension, TokenType
from token_list_engine.app.domain.ports.out import (
    Erc20TokenMetadataFetcher,
    LogoURIResolver,
)

logger = logging.getLogger(__name__)


class TokenEntryBuilder:
    """
    Builds a new token list entry from an on-chain address.

    - reads ERC-20 metadata (standard ABI, then bytes32),
    - wires chain fields and the root reference (native when no root),
    - classifies the token through TokenClassifier,
    - resolves the logo once, keyed by the root token when there is one.
    """

    def __init__(
        self,
        *,
        metadata_fetcher: Erc20TokenMetadataFetcher,
        classifier: TokenClassifier,
        logo_resolver: LogoURIResolver,
        today: Callable[[], date] = current_date,
    ) -> None:
        self._metadata_fetcher = metadata_fetcher
        self._classifier = classifier
        self._logo_resolver = logo_resolver
        self._today = today

    async def build_token(
        self,
        *,
        chain_id: int,
        address: str,
        root_address: str | None = None,
    ) -> Token:
        chain = get_chain(chain_id)
        token_address = normalize_address(address)

        metadata = await fetch_token_metadata(
            self._metadata_fetcher,
            chain_id=chain.chain_id,
            token_address=token_address,
        )
        if metadata is None:
            raise TokenNotFoundError("<unknown>", token_address, chain.chain_id)

        extension: TokenExtension | None = None
        if root_address:
            root_chain = get_root_chain(chain.chain_id)
            extension = TokenExtension(
                root_chain_id=root_chain.chain_id,
                root_chain_uri=root_chain.chain_uri,
                root_address=normalize_address(root_address),
            )

        draft = metadata.to_skeleton_token(today=self._today()).model_copy(
            update={
                "chain_id": chain.chain_id,
                "address": token_address,
                "extension": extension,
            }
        )

        token = await self._classifier.verify_token(draft, metadata=metadata)

        if not token.token_type:
            # root on Linea: not re-verified on chain, the bridge deployed it
            token = token.model_copy(update={"token_type": [TokenType.CANONICAL_BRIDGE]})

        if token.extension is not None:
            logo_chain_id, logo_address = token.extension.root_chain_id, token.extension.root_address
        else:
            logo_chain_id, logo_address = token.chain_id, token.address

        logo_uri = await self._logo_resolver.resolve(chain_id=logo_chain_id, address=logo_address)
        if logo_uri:
            token = token.model_copy(update={"logo_uri": logo_uri})

        logger.info(
            "Token entry built",
            extra={
                "token_name": token.name,
                "address": token.address,
                "token_type": [t.value for t in token.token_type],
            },
        )
        return token
