from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

from token_list_engine.app.application.services.check_token_fields import check_token_fields
from token_list_engine.app.application.services.classify_token import TokenClassifier
from token_list_engine.app.domain.models import Token, TokenList

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


def _chunks(seq: list[Any], size: int) -> Iterable[list[Any]]:
    for i in range(0, len(seq), size):
        yield seq[i : i + size]


class BatchVerifier:
    """
    Verifies every token of a list against on-chain state.

    Strategy:
    - Work on a deep copy of the list's tokens; the list itself is untouched.
    - Split token slots into fixed-size batches; batches run one after another,
      tokens inside a batch run concurrently (bounded RPC load).
    - Each token is verified by TokenClassifier and then checked field by field
      against the recorded entry before it replaces its slot.
    - Any failure inside a batch propagates out of the join and aborts the run;
      no partial result is returned.
    """

    def __init__(
        self,
        *,
        classifier: TokenClassifier,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._classifier = classifier
        self._batch_size = batch_size

    async def verify(self, token_list: TokenList) -> list[Token]:
        working = [token.model_copy(deep=True) for token in token_list.tokens]
        total = len(working)

        logger.info(
            "Starting token list verification",
            extra={"list_name": token_list.name, "total": total, "batch_size": self._batch_size},
        )

        for batch_idx, slots in enumerate(
            _chunks(list(range(total)), self._batch_size), start=1
        ):
            logger.info(
                "Verifying token batch %s (%s/%s)",
                batch_idx,
                min(batch_idx * self._batch_size, total),
                total,
            )

            verified = await asyncio.gather(
                *(self._verify_slot(working[slot]) for slot in slots)
            )

            for slot, token in zip(slots, verified):
                working[slot] = token

        logger.info("Finished token list verification", extra={"total": total})
        return working

    async def _verify_slot(self, token: Token) -> Token:
        verified = await self._classifier.verify_token(token)
        return check_token_fields(token, verified)
