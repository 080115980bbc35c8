from __future__ import annotations

import asyncio

from token_list_engine.app.application.services.merge_token_list import merge_token_lists
from token_list_engine.app.application.services.reconcile_token_list import Reconciler
from token_list_engine.app.config import settings
from token_list_engine.app.infrastructure.storage.json_token_list_store import JsonTokenListStore


async def sync_token_shortlist_task(
    *,
    list_path: str | None = None,
    short_list_path: str | None = None,
) -> None:
    """
    Task: fold the curated shortlist into the full list.

    No RPC access; entries are upserted by checksum address and the full list
    is written only if it changed.
    """
    full_store = JsonTokenListStore(list_path or settings.token_full_list_path)
    short_store = JsonTokenListStore(short_list_path or settings.token_short_list_path)

    full_list, short_list = await asyncio.gather(full_store.read(), short_store.read())

    tokens = merge_token_lists(full_list.tokens, short_list.tokens)

    await Reconciler(store=full_store).reconcile(full_list, tokens)
