from __future__ import annotations

from typing import Callable, Dict, Mapping

import httpx
from web3 import AsyncWeb3

from token_list_engine.app.application.services.build_token_entry import TokenEntryBuilder
from token_list_engine.app.application.services.classify_token import TokenClassifier
from token_list_engine.app.config import settings
from token_list_engine.app.domain.chains import ETHEREUM_MAINNET, LINEA_MAINNET
from token_list_engine.app.infrastructure.fetchers.bridge_mapping_fetcher import (
    Web3BridgeMappingResolver,
)
from token_list_engine.app.infrastructure.fetchers.erc20_tokens_fetcher import (
    Web3Erc20TokenMetadataFetcher,
)
from token_list_engine.app.infrastructure.resolvers.coingecko_logo_resolver import (
    CoinGeckoLogoURIResolver,
)

Clients = Mapping[int, AsyncWeb3]

TokenClassifierFactory = Callable[[Clients], TokenClassifier]
TokenEntryBuilderFactory = Callable[[Clients, httpx.AsyncClient], TokenEntryBuilder]

_TOKEN_CLASSIFIER_REGISTRY: Dict[str, TokenClassifierFactory] = {}
_TOKEN_ENTRY_BUILDER_REGISTRY: Dict[str, TokenEntryBuilderFactory] = {}


def _make_web3_classifier(clients: Clients) -> TokenClassifier:
    """
    Wire dependencies for the web3 backend:
    - ERC-20 metadata fetcher (name/symbol/decimals via eth_call, both chains)
    - bridge mapping resolver (nativeToBridgedToken on the L1 and L2 bridges)
    """
    fetcher = Web3Erc20TokenMetadataFetcher(clients=clients)
    resolver = Web3BridgeMappingResolver(
        l1_w3=clients[ETHEREUM_MAINNET.chain_id],
        l2_w3=clients[LINEA_MAINNET.chain_id],
        l1_bridge_address=settings.l1_token_bridge_address,
        l2_bridge_address=settings.l2_token_bridge_address,
    )
    return TokenClassifier(metadata_fetcher=fetcher, mapping_resolver=resolver)


def _make_web3_entry_builder(clients: Clients, http_client: httpx.AsyncClient) -> TokenEntryBuilder:
    return TokenEntryBuilder(
        metadata_fetcher=Web3Erc20TokenMetadataFetcher(clients=clients),
        classifier=_make_web3_classifier(clients),
        logo_resolver=CoinGeckoLogoURIResolver(
            client=http_client,
            base_url=settings.coingecko_url,
        ),
    )


# Register backends
_TOKEN_CLASSIFIER_REGISTRY["web3"] = _make_web3_classifier
_TOKEN_ENTRY_BUILDER_REGISTRY["web3"] = _make_web3_entry_builder


def token_classifier_factory(
    *,
    backend: str,
    clients: Clients,
) -> TokenClassifier:
    """
    Create a token classifier for the given backend.

    `clients` must hold one connected AsyncWeb3 per bridged chain id.
    """
    try:
        factory = _TOKEN_CLASSIFIER_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported token classifier backend: {backend!r}")

    return factory(clients)


def token_entry_builder_factory(
    *,
    backend: str,
    clients: Clients,
    http_client: httpx.AsyncClient,
) -> TokenEntryBuilder:
    """
    Create a token entry builder: classifier + metadata fetcher + logo resolver.
    """
    try:
        factory = _TOKEN_ENTRY_BUILDER_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported token entry builder backend: {backend!r}")

    return factory(clients, http_client)
