from __future__ import annotations
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Dict, List, Optional

from settings import DATA_DIR
from systems.reporter import SessionOutcome

logger = logging.getLogger("catchgame.progress")

DB_PATH = DATA_DIR / "progress.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS focus_points (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    total INTEGER NOT NULL DEFAULT 0
);
INSERT OR IGNORE INTO focus_points (id, total) VALUES (1, 0);
CREATE TABLE IF NOT EXISTS catch_sessions (
    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id INTEGER NOT NULL,
    score INTEGER NOT NULL,
    missed INTEGER NOT NULL,
    elapsed_ticks INTEGER NOT NULL,
    reason TEXT NOT NULL,
    tier TEXT NOT NULL,
    ended_at TEXT NOT NULL
);
"""

def _check_points(points: int) -> None:
    if points < 0:
        raise ValueError(f"points must be non-negative, got {points}")

class LocalProgressStore:
    """Focus points and finished catch sessions kept in a local SQLite file.

    Storage errors are logged and dropped: the game never waits on, or
    fails because of, the progress store.
    """

    def __init__(self, db_path: Path | str = DB_PATH):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.executescript(SCHEMA)
        return conn

    def record_session(self, outcome: SessionOutcome) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    """
                    INSERT INTO catch_sessions
                        (session_id, score, missed, elapsed_ticks, reason, tier, ended_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        outcome.session_id, outcome.score, outcome.missed, outcome.elapsed_ticks,
                        outcome.reason, outcome.tier, outcome.ended_at.isoformat(),
                    ),
                )
        except (sqlite3.Error, OSError) as e:
            logger.warning("failed to record session %s: %s", outcome.session_id, e)

    def add_points(self, points: int) -> None:
        _check_points(points)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("UPDATE focus_points SET total = total + ? WHERE id = 1", (points,))
        except (sqlite3.Error, OSError) as e:
            logger.warning("failed to add %s points: %s", points, e)

    def total_points(self) -> int:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT total FROM focus_points WHERE id = 1").fetchone()
        return row[0] if row else 0

    def total_sessions(self) -> int:
        with closing(self._connect()) as conn:
            return conn.execute("SELECT COUNT(*) FROM catch_sessions").fetchone()[0]

    def best_score(self) -> int:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT MAX(score) FROM catch_sessions").fetchone()
        return row[0] or 0

    def recent_sessions(self, limit: int = 10) -> List[Dict]:
        with closing(self._connect()) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                "SELECT * FROM catch_sessions ORDER BY row_id DESC LIMIT ?", (limit,)
            ).fetchall()
        return [dict(row) for row in rows]

    def reset_progress(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute("DELETE FROM catch_sessions")
            conn.execute("UPDATE focus_points SET total = 0 WHERE id = 1")

class RemoteProgressStore:
    """Writes the same facts to Postgres on the background event loop."""

    def __init__(self, db, runner=None):
        from async_helper import run_async
        self.db = db
        self.run = runner if runner is not None else run_async

    @property
    def available(self) -> bool:
        return bool(self.db and self.db.pool)

    def record_session(self, outcome: SessionOutcome) -> None:
        if not self.available:
            return
        try:
            self.run(self.db.record_session(outcome))
        except Exception as e:
            logger.warning("failed to record session %s remotely: %s", outcome.session_id, e)

    def add_points(self, points: int) -> None:
        _check_points(points)
        if not self.available:
            return
        try:
            self.run(self.db.add_points(points))
        except Exception as e:
            logger.warning("failed to add %s points remotely: %s", points, e)

def make_store(db=None, db_path: Optional[Path] = None):
    """Remote store when a database pool is up, local SQLite otherwise."""
    if db is not None and db.pool:
        return RemoteProgressStore(db)
    return LocalProgressStore(db_path or DB_PATH)
