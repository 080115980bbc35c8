from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator


class AbiType(str, Enum):
    STANDARD = "standard"
    BYTE32 = "byte32"


class TokenType(str, Enum):
    CANONICAL_BRIDGE = "canonical-bridge"
    BRIDGE_RESERVED = "bridge-reserved"
    EXTERNAL_BRIDGE = "external-bridge"
    NATIVE = "native"


class _ListModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class TokenExtension(_ListModel):
    root_chain_id: int = Field(alias="rootChainId")
    root_chain_uri: str = Field(alias="rootChainURI")
    root_address: str = Field(alias="rootAddress")


class Token(_ListModel):
    """
    One entry of the token list.

    Field declaration order is the on-disk key order, so model_dump(by_alias=True)
    reproduces the canonical layout:
      chainId, chainURI, tokenId, tokenType, address, name, symbol, decimals,
      createdAt, updatedAt, logoURI?, extension?
    """

    chain_id: int = Field(alias="chainId")
    chain_uri: str = Field(alias="chainURI")
    token_id: str = Field(alias="tokenId")
    token_type: list[TokenType] = Field(alias="tokenType")
    address: str
    name: str
    symbol: str
    decimals: NonNegativeInt
    created_at: date = Field(alias="createdAt")
    updated_at: date = Field(alias="updatedAt")
    logo_uri: str | None = Field(default=None, alias="logoURI")
    extension: TokenExtension | None = None

    @model_validator(mode="after")
    def check_native_has_no_extension(self) -> "Token":
        if TokenType.NATIVE in self.token_type and self.extension is not None:
            raise ValueError(f"Native token {self.name!r} must not carry an extension")
        if self.extension is not None and not self.extension.root_address:
            raise ValueError(f"Token {self.name!r} has an extension without rootAddress")
        return self

    @property
    def root_address(self) -> str | None:
        return self.extension.root_address if self.extension else None


class Version(_ListModel):
    major: NonNegativeInt
    minor: NonNegativeInt
    patch: NonNegativeInt


class TokenList(_ListModel):
    type: str
    token_list_id: str = Field(alias="tokenListId")
    name: str
    created_at: date = Field(alias="createdAt")
    updated_at: date = Field(alias="updatedAt")
    versions: list[Version]
    tokens: list[Token]


def parse_token(data: dict[str, Any]) -> Token:
    return Token.model_validate(data)


def format_token(token: Token) -> dict[str, Any]:
    return token.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_token_list(data: dict[str, Any]) -> TokenList:
    return TokenList.model_validate(data)


def format_token_list(token_list: TokenList) -> dict[str, Any]:
    return token_list.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class TokenMetadata:
    """ERC-20 name/symbol/decimals as read from the contract at `address`."""

    address: str
    name: str
    symbol: str
    decimals: int

    def to_skeleton_token(self, *, today: date) -> Token:
        """
        Token with blank chain wiring; the queried address is recorded as
        extension.rootAddress until the caller fills in the chain fields.
        """
        return Token(
            chain_id=0,
            chain_uri="",
            token_id="",
            token_type=[],
            address="",
            name=self.name,
            symbol=self.symbol,
            decimals=self.decimals,
            created_at=today,
            updated_at=today,
            extension=TokenExtension(
                root_chain_id=0,
                root_chain_uri="",
                root_address=self.address,
            ),
        )


@dataclass(frozen=True)
class BridgeMappings:
    l1_root_status_mapping: str
    l2_ethereum_to_linea_token: str
    l1_linea_to_ethereum_token: str

    def values(self) -> tuple[str, str, str]:
        return (
            self.l1_root_status_mapping,
            self.l2_ethereum_to_linea_token,
            self.l1_linea_to_ethereum_token,
        )


@dataclass(frozen=True)
class RootRef:
    chain_id: int
    address: str


@dataclass(frozen=True)
class NativeVerification:
    address: str
    chain_id: int
    metadata: TokenMetadata

    @property
    def token_type(self) -> tuple[TokenType, ...]:
        return (TokenType.NATIVE,)


@dataclass(frozen=True)
class BridgedVerification:
    address: str
    chain_id: int
    metadata: TokenMetadata
    root: RootRef
    token_type: tuple[TokenType, ...] = field(default=())


Verification = Union[NativeVerification, BridgedVerification]
