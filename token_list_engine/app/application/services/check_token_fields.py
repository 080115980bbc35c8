from __future__ import annotations

import logging
from typing import Any, Callable

from token_list_engine.app.domain.addresses import same_address
from token_list_engine.app.domain.errors import TokenFieldMismatchError
from token_list_engine.app.domain.models import Token

logger = logging.getLogger(__name__)


def _root_address(token: Token) -> str | None:
    return token.extension.root_address if token.extension else None


def _root_chain_id(token: Token) -> int | None:
    return token.extension.root_chain_id if token.extension else None


# (field, getter, compare-as-address)
_HARD_FIELDS: tuple[tuple[str, Callable[[Token], Any], bool], ...] = (
    ("address", lambda t: t.address, True),
    ("rootAddress", _root_address, True),
    ("symbol", lambda t: t.symbol, False),
    ("decimals", lambda t: t.decimals, False),
    ("chainId", lambda t: t.chain_id, False),
    ("rootChainId", _root_chain_id, False),
)

# (field, attribute)
_SOFT_FIELDS: tuple[tuple[str, str], ...] = (
    ("tokenId", "token_id"),
    ("tokenType", "token_type"),
)


def check_token_fields(current: Token, verified: Token) -> Token:
    """
    Compare a recorded token with its freshly verified form.

    Identity fields must match exactly (addresses checksum-insensitively);
    any divergence means the recorded entry itself is wrong and is raised as
    TokenFieldMismatchError. tokenId / tokenType divergences are taken from
    the verified token with a warning.

    Returns the token to keep in the list.
    """
    for field, getter, is_address in _HARD_FIELDS:
        current_value = getter(current)
        new_value = getter(verified)
        equal = (
            same_address(current_value, new_value)
            if is_address
            else current_value == new_value
        )
        if not equal:
            logger.error(
                "%s mismatch",
                field,
                extra={
                    "token_name": current.name,
                    "current_value": current_value,
                    "new_value": new_value,
                },
            )
            raise TokenFieldMismatchError(field, current.name, current_value, new_value)

    updates: dict[str, Any] = {}
    for field, attr in _SOFT_FIELDS:
        current_value = getattr(current, attr)
        new_value = getattr(verified, attr)
        if current_value != new_value:
            logger.warning(
                "%s mismatch, overwriting with verified value",
                field,
                extra={
                    "token_name": current.name,
                    "current_value": _loggable(current_value),
                    "new_value": _loggable(new_value),
                },
            )
            updates[attr] = new_value

    if not updates:
        return current
    return current.model_copy(update=updates)


def _loggable(value: Any) -> Any:
    if isinstance(value, list):
        return [getattr(v, "value", v) for v in value]
    return value
