from __future__ import annotations

from dataclasses import dataclass

from token_list_engine.app.domain.errors import UnsupportedChainError


@dataclass(frozen=True)
class ChainInfo:
    """
    Explorer wiring for one of the two bridged networks.

    chain_uri is the explorer link to the genesis block, which is what the
    token list uses as `chainURI` / `rootChainURI`.
    """

    chain_id: int
    name: str
    chain_uri: str
    address_uri: str

    def token_uri(self, address: str) -> str:
        return f"{self.address_uri}{address}"


ETHEREUM_MAINNET = ChainInfo(
    chain_id=1,
    name="Ethereum Mainnet",
    chain_uri="https://etherscan.io/block/0",
    address_uri="https://etherscan.io/address/",
)

LINEA_MAINNET = ChainInfo(
    chain_id=59144,
    name="Linea Mainnet",
    chain_uri="https://lineascan.build/block/0",
    address_uri="https://lineascan.build/address/",
)

_CHAINS: dict[int, ChainInfo] = {
    ETHEREUM_MAINNET.chain_id: ETHEREUM_MAINNET,
    LINEA_MAINNET.chain_id: LINEA_MAINNET,
}

_COUNTERPARTS: dict[int, ChainInfo] = {
    ETHEREUM_MAINNET.chain_id: LINEA_MAINNET,
    LINEA_MAINNET.chain_id: ETHEREUM_MAINNET,
}


def get_chain(chain_id: int) -> ChainInfo:
    try:
        return _CHAINS[chain_id]
    except KeyError:
        raise UnsupportedChainError(chain_id)


def get_root_chain(chain_id: int) -> ChainInfo:
    """Chain on the other side of the bridge, where a bridged token's root lives."""
    try:
        return _COUNTERPARTS[chain_id]
    except KeyError:
        raise UnsupportedChainError(chain_id)
