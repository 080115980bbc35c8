"""Tests for the chain registry."""

import pytest

from token_list_engine.app.domain.chains import (
    ETHEREUM_MAINNET,
    LINEA_MAINNET,
    get_chain,
    get_root_chain,
)
from token_list_engine.app.domain.errors import UnsupportedChainError


class TestChains:
    def test_linea_uris(self):
        chain = get_chain(59144)

        assert chain.chain_uri == "https://lineascan.build/block/0"
        assert chain.token_uri("0xabc") == "https://lineascan.build/address/0xabc"

    def test_ethereum_uris(self):
        chain = get_chain(1)

        assert chain.chain_uri == "https://etherscan.io/block/0"
        assert chain.token_uri("0xabc") == "https://etherscan.io/address/0xabc"

    def test_root_chain_is_the_counterpart(self):
        assert get_root_chain(LINEA_MAINNET.chain_id) is ETHEREUM_MAINNET
        assert get_root_chain(ETHEREUM_MAINNET.chain_id) is LINEA_MAINNET

    @pytest.mark.parametrize("lookup", [get_chain, get_root_chain])
    def test_unsupported_chain(self, lookup):
        with pytest.raises(UnsupportedChainError, match="Invalid chainId"):
            lookup(999999)
