from __future__ import annotations

from token_list_engine.app.application.services.reconcile_token_list import Reconciler
from token_list_engine.app.application.services.verify_token_list import BatchVerifier
from token_list_engine.app.config import settings
from token_list_engine.app.infrastructure.factories.token_list_factory import (
    token_classifier_factory,
)
from token_list_engine.app.infrastructure.rpc.clients import (
    close_chain_clients,
    create_chain_clients,
)
from token_list_engine.app.infrastructure.storage.json_token_list_store import JsonTokenListStore


async def verify_token_list_task(
    *,
    list_path: str | None = None,
    backend: str = "web3",
) -> None:
    """
    Task: verify every entry of a token list against both bridges.

    - reads the list (defaults to the shortlist),
    - verifies tokens in batches, aborting on the first fatal mismatch,
    - writes the list back only if something changed (minor version bump).
    """
    store = JsonTokenListStore(list_path or settings.token_short_list_path)
    token_list = await store.read()

    clients = await create_chain_clients()
    try:
        classifier = token_classifier_factory(backend=backend, clients=clients)

        verifier = BatchVerifier(classifier=classifier, batch_size=settings.verify_batch_size)
        tokens = await verifier.verify(token_list)
    finally:
        await close_chain_clients(clients)

    await Reconciler(store=store).reconcile(token_list, tokens)
