import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from lexdocs.config.settings import Settings
from lexdocs.database.connection import close_pool, get_connection, init_pool

DOCUMENT_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS "Document" (
    id SERIAL PRIMARY KEY,
    "fileName" TEXT NOT NULL,
    title TEXT,
    date TIMESTAMP(3),
    court TEXT,
    "caseNumber" TEXT,
    summary TEXT,
    "caseType" TEXT,
    area TEXT,
    metadata JSONB,
    "areaData" JSONB,
    "createdAt" TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updatedAt" TIMESTAMP(3) NOT NULL
)
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "lexdocs_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(DOCUMENT_TABLE_DDL)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Collects document IDs created by a test and deletes them afterwards."""
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute('DELETE FROM "Document" WHERE id = ANY(%s)', (cleanup,))
        conn.commit()


@pytest.fixture
def seed_legacy_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[int],
) -> int:
    """Insert a row whose JSON columns use the key/value-pair encoding."""
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO "Document" ("fileName", metadata, "areaData", "updatedAt")
            VALUES (%s, %s::jsonb, %s::jsonb, NOW())
            RETURNING id
            """,
            (
                "legacy.pdf",
                '[{"key": "pages", "value": "3"}]',
                '[{"key": "court", "value": "X"}, {"key": "court", "value": "Y"}]',
            ),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = row[0]
    db_conn.commit()
    integration_cleanup.append(document_id)
    return int(document_id)
