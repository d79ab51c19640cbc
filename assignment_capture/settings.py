"""
Local settings storage.

Keeps small key/value settings (such as which API origin to submit to) in a
SQLite database under the data directory, so they survive between runs.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import DATA_DIR, DEFAULT_ORIGIN_MODE, ORIGIN_MODE_KEY
from .submission import resolve_origin


class SettingsStore:
    """Key/value settings backed by SQLite."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize settings store.

        Args:
            data_dir: Directory for the settings database. Defaults to DATA_DIR.
        """
        if data_dir is None:
            data_dir = DATA_DIR
        data_dir = Path(data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = data_dir / "settings.db"
        self._init_db()

    def _init_db(self):
        """Initialize database schema."""
        conn = sqlite3.connect(self.db_path)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
        """)
        conn.commit()
        conn.close()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a setting, returning default if it was never set."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = cursor.fetchone()
        conn.close()

        if row is None:
            return default
        return row[0]

    def set(self, key: str, value: str):
        """Store a setting, replacing any previous value."""
        conn = sqlite3.connect(self.db_path)
        conn.execute(
            "INSERT OR REPLACE INTO settings (key, value, timestamp) VALUES (?, ?, ?)",
            (key, value, datetime.now().isoformat())
        )
        conn.commit()
        conn.close()

    def get_origin_mode(self) -> str:
        """Stored API origin mode: 'prod', 'dev' or a custom URL."""
        return self.get(ORIGIN_MODE_KEY, DEFAULT_ORIGIN_MODE) or DEFAULT_ORIGIN_MODE

    def set_origin_mode(self, mode_or_url: str) -> str:
        """Store the API origin mode and return the origin it resolves to."""
        self.set(ORIGIN_MODE_KEY, mode_or_url)
        return resolve_origin(mode_or_url)

    def get_origin(self) -> str:
        """API origin for the stored mode."""
        return resolve_origin(self.get_origin_mode())
