from __future__ import annotations

import httpx

from token_list_engine.app.application.services.merge_token_list import merge_token_lists
from token_list_engine.app.application.services.reconcile_token_list import Reconciler
from token_list_engine.app.config import settings
from token_list_engine.app.domain.addresses import same_address
from token_list_engine.app.infrastructure.factories.token_list_factory import (
    token_entry_builder_factory,
)
from token_list_engine.app.infrastructure.rpc.clients import (
    close_chain_clients,
    create_chain_clients,
)
from token_list_engine.app.infrastructure.storage.json_token_list_store import JsonTokenListStore


async def add_token_task(
    *,
    chain_id: int,
    address: str,
    root_address: str | None = None,
    list_path: str | None = None,
    backend: str = "web3",
) -> None:
    """
    Task: build a new entry from chain state and upsert it into a list.

    root_address is the token's counterpart on the other chain; leave it
    empty for a native token.
    """
    store = JsonTokenListStore(list_path or settings.token_full_list_path)
    token_list = await store.read()

    clients = await create_chain_clients()
    try:
        async with httpx.AsyncClient(timeout=settings.rpc_timeout_seconds) as http_client:
            builder = token_entry_builder_factory(
                backend=backend,
                clients=clients,
                http_client=http_client,
            )
            token = await builder.build_token(
                chain_id=chain_id,
                address=address,
                root_address=root_address or None,
            )
    finally:
        await close_chain_clients(clients)

    existing = next(
        (t for t in token_list.tokens if same_address(t.address, token.address)),
        None,
    )
    if existing is not None:
        token = token.model_copy(update={"created_at": existing.created_at})

    tokens = merge_token_lists(token_list.tokens, [token])

    await Reconciler(store=store).reconcile(token_list, tokens)
