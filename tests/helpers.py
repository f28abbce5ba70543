"""
tests.helpers

Raw sqlite3 helpers for building and inspecting database files outside the
application's own engine.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

# Schema as shipped by version 1 builds (no `materials.unit`).
V1_SCHEMA = """
CREATE TABLE projects (
    id TEXT NOT NULL PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    imageUri TEXT,
    createdAt INTEGER NOT NULL
);
CREATE TABLE materials (
    id TEXT NOT NULL PRIMARY KEY,
    projectId TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    quantity TEXT NOT NULL,
    price TEXT NOT NULL,
    description TEXT NOT NULL,
    isPurchased INTEGER NOT NULL,
    createdAt INTEGER NOT NULL
);
"""


def create_v1_database(path: Path, *, stamp_version: bool = True) -> None:
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(V1_SCHEMA)
        conn.execute("INSERT INTO projects VALUES ('p1', 'Garage', 'Two-car garage', NULL, 1000)")
        conn.execute("INSERT INTO materials VALUES ('m1', 'p1', 'Cement', '10', '50', '', 0, 1100)")
        if stamp_version:
            conn.execute("PRAGMA user_version = 1")
        conn.commit()
    finally:
        conn.close()


def set_user_version(path: Path, version: int) -> None:
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(f"PRAGMA user_version = {int(version)}")
        conn.commit()
    finally:
        conn.close()


def sqlite_columns(path: Path, table: str) -> list[str]:
    conn = sqlite3.connect(str(path))
    try:
        return [row[1] for row in conn.execute(f"PRAGMA table_info({table})")]
    finally:
        conn.close()


def sqlite_user_version(path: Path) -> int:
    conn = sqlite3.connect(str(path))
    try:
        return conn.execute("PRAGMA user_version").fetchone()[0]
    finally:
        conn.close()


def sqlite_rows(path: Path, sql: str) -> list[tuple]:
    conn = sqlite3.connect(str(path))
    try:
        return list(conn.execute(sql))
    finally:
        conn.close()
