from __future__ import annotations

import asyncio
from typing import Any, Mapping

from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContract

from token_list_engine.app.domain.models import AbiType, TokenMetadata
from token_list_engine.app.domain.ports.out import Erc20TokenMetadataFetcher

# Minimal ERC-20 ABI fragments
_ERC20_ABI_STD = [
    {"name": "symbol", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "string"}]},
    {"name": "decimals", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint8"}]},
    {"name": "name", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "string"}]},
]

_ERC20_ABI_BYTE32 = [
    {"name": "symbol", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "bytes32"}]},
    {"name": "decimals", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint8"}]},
    {"name": "name", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "bytes32"}]},
]

_ABIS: dict[AbiType, list[dict[str, Any]]] = {
    AbiType.STANDARD: _ERC20_ABI_STD,
    AbiType.BYTE32: _ERC20_ABI_BYTE32,
}


class Web3Erc20TokenMetadataFetcher(Erc20TokenMetadataFetcher):
    """
    ERC-20 metadata fetcher using AsyncWeb3, one client per bridged chain.

    Fetches concurrently:
      - name() -> str (bytes32 for legacy tokens)
      - symbol() -> str (bytes32 for legacy tokens)
      - decimals() -> int

    Errors (revert, bad output, timeout, undecodable bytes) are raised as-is;
    the caller decides whether to retry with the other ABI.
    """

    def __init__(self, *, clients: Mapping[int, AsyncWeb3]) -> None:
        self._clients = dict(clients)

    async def fetch(
        self,
        *,
        chain_id: int,
        token_address: str,
        abi_type: AbiType,
    ) -> TokenMetadata:
        w3 = self._client(chain_id)
        # web3 expects checksum hex string
        addr_hex = AsyncWeb3.to_checksum_address(token_address)
        contract: AsyncContract = w3.eth.contract(address=addr_hex, abi=_ABIS[abi_type])

        raw_name, raw_symbol, raw_decimals = await asyncio.gather(
            contract.functions.name().call(),
            contract.functions.symbol().call(),
            contract.functions.decimals().call(),
        )

        if abi_type is AbiType.BYTE32:
            name = self._parse_bytes32_string(raw_name)
            symbol = self._parse_bytes32_string(raw_symbol)
        else:
            name = raw_name
            symbol = raw_symbol

        decimals = int(raw_decimals)
        if not 0 <= decimals <= 255:
            raise ValueError(f"decimals out of range for {addr_hex}: {decimals}")

        return TokenMetadata(
            address=addr_hex,
            name=name,
            symbol=symbol,
            decimals=decimals,
        )

    def _client(self, chain_id: int) -> AsyncWeb3:
        try:
            return self._clients[chain_id]
        except KeyError:
            raise ValueError(f"No RPC client configured for chain_id={chain_id}")

    @staticmethod
    def _parse_bytes32_string(val: Any) -> str:
        if isinstance(val, (bytes, bytearray, memoryview)):
            return bytes(val).rstrip(b"\x00").decode("utf-8")
        raise ValueError(f"Expected bytes32 value, got {type(val).__name__}")
