"""Database Infrastructure — SQLAlchemy Base for the database artifact backend.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
