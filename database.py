from __future__ import annotations
import logging
import asyncpg
from typing import Optional, Dict, TYPE_CHECKING
from settings import DatabaseConfig

if TYPE_CHECKING:
    from systems.reporter import SessionOutcome

logger = logging.getLogger("catchgame.database")

SCHEMA = """
    -- Running total of focus points earned in the mini game
    CREATE TABLE IF NOT EXISTS focus_points (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        total INTEGER NOT NULL DEFAULT 0
    );
    INSERT INTO focus_points (id, total) VALUES (1, 0) ON CONFLICT (id) DO NOTHING;

    -- One row per finished catch session
    CREATE TABLE IF NOT EXISTS catch_sessions (
        row_id SERIAL PRIMARY KEY,
        session_id INTEGER NOT NULL,
        score INTEGER NOT NULL,
        missed INTEGER NOT NULL,
        elapsed_ticks INTEGER NOT NULL,
        reason VARCHAR(20) NOT NULL,
        tier VARCHAR(20) NOT NULL,
        ended_at TIMESTAMP NOT NULL DEFAULT NOW()
    );

    CREATE INDEX IF NOT EXISTS idx_catch_sessions_score ON catch_sessions(score DESC);
"""

class DatabaseManager:
    """Async database manager for Neon/Postgres with connection pooling."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Create connection pool."""
        if not self.config.is_configured:
            logger.info("⚠️  Database not configured - skipping connection")
            return

        try:
            if self.config.connection_string:
                self.pool = await asyncpg.create_pool(
                    self.config.connection_string,
                    min_size=1,
                    max_size=4,
                    command_timeout=60
                )
            else:
                self.pool = await asyncpg.create_pool(
                    host=self.config.host,
                    port=self.config.port,
                    database=self.config.database,
                    user=self.config.user,
                    password=self.config.password,
                    min_size=1,
                    max_size=4,
                    command_timeout=60
                )
            logger.info("✅ Database connected successfully")
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.warning("❌ Database connection failed: %s", e)
            self.pool = None

    async def disconnect(self) -> None:
        """Close connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("🔌 Database disconnected")

    async def execute(self, query: str, *args) -> str:
        """Execute a query that doesn't return rows (INSERT, UPDATE, DELETE)."""
        if not self.pool:
            raise RuntimeError("Database not connected")
        async with self.pool.acquire() as conn:
            return await conn.execute(query, *args)

    async def fetchrow(self, query: str, *args) -> Optional[asyncpg.Record]:
        """Fetch a single row."""
        if not self.pool:
            raise RuntimeError("Database not connected")
        async with self.pool.acquire() as conn:
            return await conn.fetchrow(query, *args)

    # ========== PROGRESS ==========

    async def add_points(self, points: int) -> None:
        await self.execute("UPDATE focus_points SET total = total + $1 WHERE id = 1", points)

    async def record_session(self, outcome: "SessionOutcome") -> None:
        query = """
            INSERT INTO catch_sessions (session_id, score, missed, elapsed_ticks, reason, tier, ended_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
        """
        await self.execute(
            query,
            outcome.session_id,
            outcome.score,
            outcome.missed,
            outcome.elapsed_ticks,
            outcome.reason,
            outcome.tier,
            outcome.ended_at,
        )

    async def get_totals(self) -> Dict:
        """Total points, number of sessions and best score."""
        query = """
            SELECT f.total AS total_points,
                   COUNT(c.row_id) AS total_sessions,
                   COALESCE(MAX(c.score), 0) AS best_score
            FROM focus_points f
            LEFT JOIN catch_sessions c ON TRUE
            WHERE f.id = 1
            GROUP BY f.total
        """
        row = await self.fetchrow(query)
        return dict(row) if row else {"total_points": 0, "total_sessions": 0, "best_score": 0}

    # ========== DATABASE INITIALIZATION ==========

    async def init_schema(self) -> None:
        """Create the progress tables."""
        if not self.pool:
            return
        async with self.pool.acquire() as conn:
            await conn.execute(SCHEMA)
        logger.info("📊 Database schema initialized with focus_points and catch_sessions tables")
