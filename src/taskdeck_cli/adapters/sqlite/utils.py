"""Row, id and JSON column helpers shared by the SQLite repositories."""

from __future__ import annotations

import json
import uuid
from typing import Any


def generate_uuid() -> str:
    return str(uuid.uuid4())


def row_to_dict(row: Any) -> dict[str, Any]:
    """``sqlite3.Row`` to a plain dict; a missing row becomes ``{}``."""
    return dict(row) if row is not None else {}


def build_update_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build ``"a = ?, b = ?"`` and its parameter list from column updates."""
    return ", ".join(f"{column} = ?" for column in updates), list(updates.values())


def placeholders(values: list[Any]) -> str:
    """``?, ?, ?`` for an ``IN`` clause over ``values``."""
    return ", ".join("?" * len(values))


def dump_json(value: Any) -> str | None:
    """Serialize a JSON column; ``None`` stays SQL NULL."""
    return None if value is None else json.dumps(value, default=str)


def load_json(value: str | None) -> Any:
    return None if value is None else json.loads(value)
