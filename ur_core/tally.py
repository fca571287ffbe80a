from __future__ import annotations

import json
import os
import sqlite3
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from .board import DARK, LIGHT, Side

TALLY_KEY = 'rgu-wins'
DEFAULT_DB = 'data/ur_wins.db'


def debug_enabled() -> bool:
    return os.getenv('UR_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class WinTally:
    """Cumulative wins per side; survives resets and restarts."""
    light_wins: int = 0
    dark_wins: int = 0

    def incremented(self, side: Side) -> 'WinTally':
        if side == LIGHT:
            return replace(self, light_wins=self.light_wins + 1)
        if side == DARK:
            return replace(self, dark_wins=self.dark_wins + 1)
        raise ValueError(f'unknown side: {side!r}')

    def to_json(self) -> str:
        return json.dumps({'light': self.light_wins, 'dark': self.dark_wins})


def _count(obj: Any) -> Optional[int]:
    # bool is an int subclass; reject it along with negatives and floats
    if isinstance(obj, bool) or not isinstance(obj, int) or obj < 0:
        return None
    return obj


def parse_tally(raw: Optional[str]) -> WinTally:
    """Decodes a stored tally, falling back to zero on anything malformed."""
    if raw is None:
        return WinTally()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        if debug_enabled():
            print(f'[tally] undecodable value {raw!r}; starting from 0-0')
        return WinTally()
    if not isinstance(data, dict):
        if debug_enabled():
            print(f'[tally] expected an object, got {type(data).__name__}; starting from 0-0')
        return WinTally()
    light = _count(data.get('light'))
    dark = _count(data.get('dark'))
    if light is None or dark is None:
        if debug_enabled():
            print(f'[tally] bad counts in {data!r}; starting from 0-0')
        return WinTally()
    return WinTally(light_wins=light, dark_wins=dark)


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        pass
    candidates = [
        os.getenv('UR_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'ur_wins.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
        except OSError:
            continue
        if debug_enabled():
            print(f'[tally] {db_path} not writable; using {d}')
        return os.path.join(d, base)
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )
    conn.commit()


def kv_get(db_path: str, key: str) -> Optional[str]:
    resolved = _resolve_db_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        row = conn.execute('SELECT value FROM kv WHERE key = ?', (key,)).fetchone()
        return row[0] if row else None
    finally:
        conn.close()


def kv_set(db_path: str, key: str, value: str) -> None:
    resolved = _resolve_db_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        conn.execute('INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)', (key, value))
        conn.commit()
    finally:
        conn.close()


class SqliteTallyStore:
    """Keeps the tally as JSON under one key of a small SQLite key-value table."""

    def __init__(self, db_path: Optional[str] = None, key: str = TALLY_KEY) -> None:
        self.db_path = db_path or os.getenv('UR_DB', DEFAULT_DB)
        self.key = key

    def load(self) -> WinTally:
        try:
            raw = kv_get(self.db_path, self.key)
        except (sqlite3.DatabaseError, OSError) as e:
            if debug_enabled():
                print(f'[tally] cannot read {self.db_path}: {e}; starting from 0-0')
            return WinTally()
        return parse_tally(raw)

    def save(self, tally: WinTally) -> None:
        kv_set(self.db_path, self.key, tally.to_json())


class MemoryTallyStore:
    """Non-persistent store for throwaway engines and tests."""

    def __init__(self, tally: Optional[WinTally] = None) -> None:
        self.tally = tally or WinTally()
        self.saves = 0

    def load(self) -> WinTally:
        return self.tally

    def save(self, tally: WinTally) -> None:
        self.tally = tally
        self.saves += 1


TallyStore = Union[SqliteTallyStore, MemoryTallyStore]
