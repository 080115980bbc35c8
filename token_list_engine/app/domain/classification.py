from __future__ import annotations

from typing import Iterable

from token_list_engine.app.domain.addresses import ZERO_ADDRESS, normalize_address, same_address
from token_list_engine.app.domain.chains import get_chain, get_root_chain
from token_list_engine.app.domain.models import (
    BridgeMappings,
    BridgedVerification,
    Token,
    TokenExtension,
    TokenType,
    Verification,
)


def classify_bridged_token_type(
    mappings: BridgeMappings,
    *,
    root_address: str,
    previous_types: Iterable[TokenType],
    reserved_sentinel: str,
) -> tuple[TokenType, ...]:
    """
    Decide the tag set of a bridged token from the three bridge lookups.

    First match wins:
      1. any lookup returns the reserved sentinel -> BRIDGE_RESERVED
      2. L2 forward lookup is set, or the L1 reverse lookup points back at the
         root address -> CANONICAL_BRIDGE
      3. otherwise -> EXTERNAL_BRIDGE

    An EXTERNAL_BRIDGE tag already present on the token survives next to any
    non-canonical result.
    """
    if any(same_address(value, reserved_sentinel) for value in mappings.values()):
        primary = TokenType.BRIDGE_RESERVED
    elif not same_address(mappings.l2_ethereum_to_linea_token, ZERO_ADDRESS) or same_address(
        mappings.l1_linea_to_ethereum_token, root_address
    ):
        primary = TokenType.CANONICAL_BRIDGE
    else:
        primary = TokenType.EXTERNAL_BRIDGE

    # only BRIDGE_RESERVED can still need the legacy tag added
    if primary is TokenType.BRIDGE_RESERVED and TokenType.EXTERNAL_BRIDGE in set(previous_types):
        return (primary, TokenType.EXTERNAL_BRIDGE)

    return (primary,)


def bridged_token_address(
    mappings: BridgeMappings,
    *,
    token_type: Iterable[TokenType],
    reserved_sentinel: str,
) -> str | None:
    """
    Address the L2 bridge records for the root token, when it identifies the
    canonical bridged token; None otherwise.
    """
    bridged = mappings.l2_ethereum_to_linea_token
    if TokenType.CANONICAL_BRIDGE not in set(token_type):
        return None
    if same_address(bridged, ZERO_ADDRESS) or same_address(bridged, reserved_sentinel):
        return None
    return normalize_address(bridged)


def apply_verification(token: Token, verification: Verification) -> Token:
    """
    Build the verified form of `token`.

    Chain wiring (chainURI, tokenId, extension.*) is derived purely from
    chainId; name/symbol/decimals come from the on-chain metadata. Fields that
    are not verified on chain (dates, logo) are carried over from `token`.
    """
    chain = get_chain(verification.chain_id)

    extension: TokenExtension | None = None
    if isinstance(verification, BridgedVerification):
        root_chain = get_root_chain(verification.chain_id)
        extension = TokenExtension(
            root_chain_id=root_chain.chain_id,
            root_chain_uri=root_chain.chain_uri,
            root_address=verification.root.address,
        )

    return token.model_copy(
        update={
            "chain_id": chain.chain_id,
            "chain_uri": chain.chain_uri,
            "token_id": chain.token_uri(verification.address),
            "token_type": list(verification.token_type),
            "address": verification.address,
            "name": verification.metadata.name,
            "symbol": verification.metadata.symbol,
            "decimals": verification.metadata.decimals,
            "extension": extension,
        }
    )
