from __future__ import annotations

from collections.abc import Awaitable, Callable

from .add_token_task import add_token_task
from .sync_token_shortlist_task import sync_token_shortlist_task
from .verify_token_list_task import verify_token_list_task

TaskFn = Callable[..., Awaitable[None]]

TASKS: dict[str, TaskFn] = {
    "verify_token_list_task": verify_token_list_task,
    "sync_token_shortlist_task": sync_token_shortlist_task,
    "add_token_task": add_token_task,
}
