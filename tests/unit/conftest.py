from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from factories import (
    LINEA_APE,
    FakeMetadataFetcher,
    linea_token_data,
    mappings,
    token_list_data,
)
from token_list_engine.app.domain.models import Token, TokenList, parse_token, parse_token_list


@pytest.fixture
def make_token() -> Callable[..., Token]:
    def _make(**overrides: Any) -> Token:
        return parse_token(linea_token_data(**overrides))

    return _make


@pytest.fixture
def make_token_list() -> Callable[..., TokenList]:
    def _make(tokens: list[dict[str, Any]], **overrides: Any) -> TokenList:
        return parse_token_list(token_list_data(tokens, **overrides))

    return _make


@pytest.fixture
def metadata_fetcher() -> FakeMetadataFetcher:
    fetcher = FakeMetadataFetcher()
    fetcher.add(LINEA_APE, "ApeCoin", "APE", 18)
    return fetcher


@pytest.fixture
def mapping_resolver() -> MagicMock:
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=mappings(l2_bridged=LINEA_APE))
    return resolver


@pytest.fixture
def echo_mapping_resolver() -> MagicMock:
    """Bridge whose L2 forward mapping is the address being verified."""
    resolver = MagicMock()
    resolver.resolve = AsyncMock(side_effect=lambda **kwargs: mappings(l2_bridged=kwargs["address"]))
    return resolver
