from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from token_list_engine.app.application.services.token_metadata import current_date
from token_list_engine.app.domain.addresses import normalize_address
from token_list_engine.app.domain.errors import TokenListConflictError
from token_list_engine.app.domain.models import Token, TokenList, Version, format_token
from token_list_engine.app.domain.ports.out import TokenListStore

logger = logging.getLogger(__name__)


@dataclass
class TokenListDiff:
    """Structural difference between two token arrays, keyed by checksum address."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)


def diff_tokens(old: list[Token], new: list[Token]) -> TokenListDiff:
    old_by_address = {normalize_address(t.address): format_token(t) for t in old}
    new_by_address = {normalize_address(t.address): format_token(t) for t in new}

    diff = TokenListDiff()
    for address, new_data in new_by_address.items():
        old_data = old_by_address.get(address)
        if old_data is None:
            diff.added.append(address)
            continue
        changed_keys = [
            key
            for key in dict.fromkeys([*old_data, *new_data])
            if old_data.get(key) != new_data.get(key)
        ]
        if changed_keys:
            diff.changed[address] = changed_keys

    diff.removed = [a for a in old_by_address if a not in new_by_address]
    return diff


def get_bumped_versions(versions: list[Version]) -> list[Version]:
    """Single-record version list with `minor` incremented."""
    if not versions:
        raise ValueError("Token list has no version to bump")
    current = versions[0]
    return [current.model_copy(update={"minor": current.minor + 1})]


def _name_sort_key(name: str) -> tuple[str, str]:
    # case- and accent-insensitive, raw name breaks ties
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return (folded, name)


def sort_alphabetically(tokens: list[Token]) -> list[Token]:
    return sorted(tokens, key=lambda t: _name_sort_key(t.name))


class Reconciler:
    """
    Persists a verified token array only when it differs from storage.

    On change the list is re-read from the store; if its tokens no longer match
    the ones the run started from, TokenListConflictError is raised and nothing
    is written. Otherwise the minor version is bumped, updatedAt is stamped and
    tokens are written sorted by name.
    """

    def __init__(
        self,
        *,
        store: TokenListStore,
        today: Callable[[], date] = current_date,
    ) -> None:
        self._store = store
        self._today = today

    async def reconcile(self, previous: TokenList, tokens: list[Token]) -> bool:
        if tokens == previous.tokens:
            logger.info("No changes in token list", extra={"list_name": previous.name})
            return False

        fresh = await self._store.read()
        if fresh.tokens != previous.tokens:
            concurrent = diff_tokens(previous.tokens, fresh.tokens)
            logger.error(
                "Token list changed on storage since it was read, not writing",
                extra={"list_name": fresh.name},
            )
            raise TokenListConflictError(
                concurrent.added, concurrent.removed, list(concurrent.changed)
            )

        diff = diff_tokens(fresh.tokens, tokens)
        logger.info(
            "Token list changed",
            extra={
                "added": diff.added,
                "removed": diff.removed,
                "changed": diff.changed,
            },
        )

        versions = get_bumped_versions(fresh.versions)
        new_list = fresh.model_copy(
            update={
                "updated_at": self._today(),
                "versions": versions,
                "tokens": sort_alphabetically(tokens),
            }
        )
        await self._store.write(new_list)

        logger.info(
            "Token list updated",
            extra={
                "previous_token_counter": len(fresh.tokens),
                "new_token_counter": len(new_list.tokens),
                "version": f"{versions[0].major}.{versions[0].minor}.{versions[0].patch}",
            },
        )
        return True
