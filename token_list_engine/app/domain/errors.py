from __future__ import annotations

from typing import Any


class TokenListError(Exception):
    """Base exception for token list verification and maintenance."""


class UnsupportedChainError(TokenListError):
    """Raised when a token references a chain other than the two bridged networks."""

    def __init__(self, chain_id: int) -> None:
        super().__init__(f"Invalid chainId: {chain_id}")
        self.chain_id = chain_id


class TokenNotFoundError(TokenListError):
    """Raised when no verified counterpart can be produced for a token."""

    def __init__(self, name: str, address: str, chain_id: int) -> None:
        super().__init__(
            f"Token not found: {name!r} ({address}) on chainId {chain_id}"
        )
        self.name = name
        self.address = address
        self.chain_id = chain_id


class TokenFieldMismatchError(TokenListError):
    """Raised when a recorded identity field disagrees with on-chain state."""

    def __init__(self, field: str, token_name: str, current: Any, new: Any) -> None:
        super().__init__(
            f"{field} mismatch for token {token_name!r}: "
            f"current={current!r} new={new!r}"
        )
        self.field = field
        self.token_name = token_name
        self.current = current
        self.new = new


class LogoRateLimitError(TokenListError):
    """Raised when the logo provider answers with a rate limit."""


class TokenListConflictError(TokenListError):
    """Raised when the stored token list changed while a run was working on it."""

    def __init__(self, added: list[str], removed: list[str], changed: list[str]) -> None:
        super().__init__(
            "Token list was modified by another writer: "
            f"added={added} removed={removed} changed={changed}"
        )
        self.added = added
        self.removed = removed
        self.changed = changed
