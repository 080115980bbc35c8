from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from token_list_engine.app.domain.models import TokenList, format_token_list, parse_token_list
from token_list_engine.app.domain.ports.out import TokenListStore

logger = logging.getLogger(__name__)


class JsonTokenListStore(TokenListStore):
    """
    Token list persisted as a single JSON document (2-space indent, UTF-8).

    File I/O runs in a worker thread so callers can await it like any other
    suspension point.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> TokenList:
        return await asyncio.to_thread(self._read_sync)

    async def write(self, token_list: TokenList) -> None:
        await asyncio.to_thread(self._write_sync, token_list)

    def _read_sync(self) -> TokenList:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return parse_token_list(raw)
        except (OSError, json.JSONDecodeError, ValidationError):
            logger.error("Error reading token list file", extra={"path": str(self._path)})
            raise

    def _write_sync(self, token_list: TokenList) -> None:
        payload = json.dumps(format_token_list(token_list), indent=2, ensure_ascii=False)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(payload + "\n", encoding="utf-8")
        except OSError:
            logger.error("Error writing token list file", extra={"path": str(self._path)})
            raise
