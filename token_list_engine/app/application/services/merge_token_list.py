from __future__ import annotations

import logging
from typing import Iterable

from token_list_engine.app.domain.addresses import normalize_address
from token_list_engine.app.domain.models import Token

logger = logging.getLogger(__name__)


def merge_token_lists(tokens: list[Token], shortlist: Iterable[Token]) -> list[Token]:
    """
    Fold curated shortlist entries into `tokens`.

    Entries are matched by checksum address: a differing match is replaced in
    place, a missing one is appended, an identical one is left alone. Order is
    preserved and nothing is removed. The input list is not modified.
    """
    merged = list(tokens)
    index_by_address: dict[str, int] = {}
    for i, token in enumerate(merged):
        # first occurrence wins
        index_by_address.setdefault(normalize_address(token.address), i)

    for new_token in shortlist:
        token_address = normalize_address(new_token.address)
        existing_index = index_by_address.get(token_address)

        if existing_index is None:
            logger.info(
                "Add shortlist token",
                extra={"token_name": new_token.name, "address": token_address},
            )
            index_by_address[token_address] = len(merged)
            merged.append(new_token)
        elif merged[existing_index] != new_token:
            logger.info(
                "Replace token with shortlist entry",
                extra={"token_name": new_token.name, "address": token_address},
            )
            merged[existing_index] = new_token

    return merged
