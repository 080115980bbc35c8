from __future__ import annotations

import asyncio

from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContract

from token_list_engine.app.domain.addresses import normalize_address
from token_list_engine.app.domain.models import BridgeMappings
from token_list_engine.app.domain.ports.out import BridgeMappingResolver

# Token bridge fragment used for the mapping lookups
_TOKEN_BRIDGE_ABI = [
    {
        "name": "nativeToBridgedToken",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "chainId", "type": "uint256"},
            {"name": "native", "type": "address"},
        ],
        "outputs": [{"name": "token", "type": "address"}],
    },
]


class Web3BridgeMappingResolver(BridgeMappingResolver):
    """
    Reads `nativeToBridgedToken` from the L1 and L2 token bridge contracts.

    Three lookups run concurrently:
      1. L1 bridge, (root chain, root address)  -> root status on L1
      2. L2 bridge, (root chain, root address)  -> canonical L2 token
      3. L1 bridge, (token chain, token address) -> reverse mapping

    Failures are not caught: a token whose mapping cannot be read cannot be
    classified.
    """

    def __init__(
        self,
        *,
        l1_w3: AsyncWeb3,
        l2_w3: AsyncWeb3,
        l1_bridge_address: str,
        l2_bridge_address: str,
    ) -> None:
        self._l1_bridge: AsyncContract = l1_w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(l1_bridge_address),
            abi=_TOKEN_BRIDGE_ABI,
        )
        self._l2_bridge: AsyncContract = l2_w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(l2_bridge_address),
            abi=_TOKEN_BRIDGE_ABI,
        )

    async def resolve(
        self,
        *,
        root_chain_id: int,
        root_address: str,
        chain_id: int,
        address: str,
    ) -> BridgeMappings:
        root_hex = AsyncWeb3.to_checksum_address(root_address)
        token_hex = AsyncWeb3.to_checksum_address(address)

        l1_root_status, l2_bridged, l1_reverse = await asyncio.gather(
            self._native_to_bridged(self._l1_bridge, root_chain_id, root_hex),
            self._native_to_bridged(self._l2_bridge, root_chain_id, root_hex),
            self._native_to_bridged(self._l1_bridge, chain_id, token_hex),
        )

        return BridgeMappings(
            l1_root_status_mapping=l1_root_status,
            l2_ethereum_to_linea_token=l2_bridged,
            l1_linea_to_ethereum_token=l1_reverse,
        )

    @staticmethod
    async def _native_to_bridged(contract: AsyncContract, chain_id: int, native: str) -> str:
        result = await contract.functions.nativeToBridgedToken(chain_id, native).call()
        return normalize_address(result)
