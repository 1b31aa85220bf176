from __future__ import annotations

import logging

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS sites (
        id VARCHAR(64) PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        budget BIGINT NOT NULL DEFAULT 0,
        company_name VARCHAR(255) NULL,
        status VARCHAR(16) NOT NULL DEFAULT 'active',
        created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS workers (
        id VARCHAR(64) PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        daily INT NOT NULL DEFAULT 150000,
        created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS work_logs (
        id VARCHAR(64) PRIMARY KEY,
        date DATE NOT NULL,
        site_id VARCHAR(64) NOT NULL DEFAULT '',
        worker_id VARCHAR(64) NOT NULL,
        md DECIMAL(6,2) NOT NULL DEFAULT 1,
        note VARCHAR(1000) NULL,
        created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6),
        INDEX idx_work_logs_date (date)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id VARCHAR(64) PRIMARY KEY,
        date DATE NOT NULL,
        site_id VARCHAR(64) NULL,
        category VARCHAR(64) NOT NULL,
        amount BIGINT NOT NULL,
        description VARCHAR(1000) NULL,
        created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6),
        INDEX idx_transactions_date (date)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS checklists (
        id VARCHAR(64) PRIMARY KEY,
        type VARCHAR(16) NOT NULL,
        date DATE NOT NULL,
        title VARCHAR(255) NOT NULL,
        amount BIGINT NOT NULL DEFAULT 0,
        status VARCHAR(16) NOT NULL DEFAULT 'pending',
        memo VARCHAR(1000) NULL,
        created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the database and the five entity tables (idempotent)."""
    ensure_database_exists(conn_factory)
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in SCHEMA_STATEMENTS:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema ready on %s", conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
