from __future__ import annotations

import re

from school_attendance.database.bootstrap import _strip_comments, _strip_create_db_and_use, iter_sql_statements
from school_attendance.main import SCHEMA_PATH


def test_schema_file_splits_into_the_four_tables():
    sql = _strip_create_db_and_use(_strip_comments(SCHEMA_PATH.read_text(encoding="utf-8")))

    statements = list(iter_sql_statements(sql))
    tables = [re.search(r"CREATE TABLE IF NOT EXISTS (\w+)", s).group(1) for s in statements]

    assert tables == ["users", "teacher", "student", "attendance"]
    assert "UNIQUE (student_id, date)" in statements[3]


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'INSERT INTO t VALUES ("c;d")']
