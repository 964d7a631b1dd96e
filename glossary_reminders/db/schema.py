"""Database schema for users and period words"""
import logging

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id BIGSERIAL PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    knowledge_points NUMERIC(14, 3) NOT NULL DEFAULT 0,
    streak INTEGER NOT NULL DEFAULT 0,
    multiplier NUMERIC(6, 3) NOT NULL DEFAULT 1,
    last_check_in TIMESTAMPTZ,
    achievements JSONB NOT NULL DEFAULT '{}'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    CHECK (knowledge_points >= 0),
    CHECK (streak >= 0),
    CHECK (multiplier >= 1 AND multiplier <= 15)
);

CREATE INDEX IF NOT EXISTS idx_users_leaderboard ON users (knowledge_points DESC, id ASC);

CREATE TABLE IF NOT EXISTS period_words (
    id BIGSERIAL PRIMARY KEY,
    period TEXT NOT NULL CHECK (period IN ('night', 'morning', 'afternoon')),
    period_start TIMESTAMPTZ NOT NULL,
    word TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    UNIQUE (period, period_start)
);

CREATE INDEX IF NOT EXISTS idx_period_words_recent ON period_words (period_start DESC);
"""


async def ensure_schema(database) -> None:
    """Create tables and indexes if they do not exist"""
    async with database.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(SCHEMA)
        await conn.commit()
    logger.info("Database schema ensured")
