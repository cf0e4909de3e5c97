from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

# (username, password, name, role, department, year)
DEMO_USERS = (
    ("admin", "admin123", "System Administrator", "admin", None, None),
    ("hod1", "hod123", "CSE Head of Department", "hod", "CSE", None),
    ("teacher1", "teacher123", "CSE Year 3 Advisor", "teacher", "CSE", None),
    ("STU20230001", "student123", "Alice Student", "student", "CSE", 3),
    ("STU20230002", "student123", "Bob Student", "student", "ECE", 2),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def ensure_demo_data(db_config: dict) -> None:
    """Upsert demo accounts and the CSE year 3 assignment (teacher1 advises, hod1 heads)."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)
        ids: dict[str, str] = {}

        for username, password, name, role, department, year in DEMO_USERS:
            password_hash = generate_password_hash(password)
            sin_number = username if role == "student" else None
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                ids[username] = existing["user_id"]
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, department=%s, year=%s, sin_number=%s
                    WHERE username=%s
                    """,
                    (name, password_hash, role, department, year, sin_number, username),
                )
            else:
                ids[username] = str(uuid.uuid4())
                cur.execute(
                    """
                    INSERT INTO users (user_id, username, name, password_hash, role, department, year, sin_number)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (ids[username], username, name, password_hash, role, department, year, sin_number),
                )

        cur.execute(
            "SELECT assignment_id FROM department_assignments WHERE department=%s AND year=%s",
            ("CSE", 3),
        )
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO department_assignments (assignment_id, department, year, class_advisor_id, hod_id)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (str(uuid.uuid4()), "CSE", 3, ids["teacher1"], ids["hod1"]),
            )

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo data ready (%d users)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
