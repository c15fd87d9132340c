"""Named-slot persistence for schedule settings and actual records."""

from __future__ import annotations

import json
import re
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

_SLOT_KEY = re.compile(r"[A-Za-z0-9_-]{1,64}")


def check_slot_key(key: str) -> str:
    if not _SLOT_KEY.fullmatch(key):
        raise ValueError(f"invalid slot key: {key!r}")
    return key


class SlotRepository(Protocol):
    def load(self, key: str) -> Optional[Any]: ...

    def save(self, key: str, value: Any) -> None: ...


class InMemorySlotRepository:
    """Keeps JSON-serialized copies so callers never share mutable state."""

    def __init__(self) -> None:
        self._slots: Dict[str, str] = {}

    def load(self, key: str) -> Optional[Any]:
        raw = self._slots.get(check_slot_key(key))
        return None if raw is None else json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        self._slots[check_slot_key(key)] = json.dumps(value)


class SqliteSlotRepository:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                create table if not exists slots (
                    key text primary key,
                    payload text not null,
                    updated_at text not null
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def load(self, key: str) -> Optional[Any]:
        conn = self._connect()
        try:
            row = conn.execute(
                "select payload from slots where key = ?",
                (check_slot_key(key),),
            ).fetchone()
            if row is None:
                return None
            return json.loads(row["payload"])
        finally:
            conn.close()

    def save(self, key: str, value: Any) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                insert into slots (key, payload, updated_at)
                values (?, ?, ?)
                on conflict(key) do update set
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (
                    check_slot_key(key),
                    json.dumps(value),
                    datetime.now(timezone.utc).isoformat(timespec="seconds"),
                ),
            )
            conn.commit()
        finally:
            conn.close()
