"""Dialect keyword list served with every schema snapshot."""

from __future__ import annotations

# Flattened (first occurrence wins) into DEFAULT_KEYWORDS below
SQL_KEYWORDS: dict[str, list[str]] = {
    "dml": [
        "SELECT",
        "FROM",
        "WHERE",
        "INSERT",
        "UPDATE",
        "DELETE",
        "JOIN",
        "INNER",
        "LEFT",
        "RIGHT",
        "OUTER",
        "ON",
        "AS",
        "AND",
        "OR",
        "NOT",
        "IN",
        "BETWEEN",
        "LIKE",
        "IS",
        "NULL",
        "ORDER",
        "BY",
        "GROUP",
        "HAVING",
        "LIMIT",
        "OFFSET",
        "DISTINCT",
        "ASC",
        "DESC",
        "SET",
        "VALUES",
        "INTO",
        "UNION",
        "ALL",
    ],
    "ddl": [
        "CREATE",
        "ALTER",
        "DROP",
        "TABLE",
        "DATABASE",
        "INDEX",
        "VIEW",
        "PROCEDURE",
        "FUNCTION",
        "TRIGGER",
        "DEFAULT",
        "PRIMARY",
        "KEY",
        "FOREIGN",
        "REFERENCES",
        "UNIQUE",
        "CHECK",
        "CONSTRAINT",
        "CASCADE",
        "AUTO_INCREMENT",
        "UNSIGNED",
        "ZEROFILL",
        "BINARY",
        "COLLATE",
        "CHARSET",
        "ENGINE",
        "COMMENT",
        "IF",
        "EXISTS",
        "TEMPORARY",
        "TRUNCATE",
        "RENAME",
        "MODIFY",
        "CHANGE",
        "ADD",
        "COLUMN",
        "AFTER",
        "FIRST",
    ],
    "expressions": [
        "CASE",
        "WHEN",
        "THEN",
        "ELSE",
        "END",
        "CAST",
        "CONVERT",
        "COUNT",
        "SUM",
        "AVG",
        "MAX",
        "MIN",
        "SUBSTRING",
        "CONCAT",
        "LENGTH",
        "TRIM",
        "UPPER",
        "LOWER",
        "REPLACE",
        "NOW",
    ],
    "types": [
        "INT",
        "INTEGER",
        "BIGINT",
        "SMALLINT",
        "TINYINT",
        "DECIMAL",
        "NUMERIC",
        "FLOAT",
        "DOUBLE",
        "REAL",
        "VARCHAR",
        "CHAR",
        "TEXT",
        "BLOB",
        "DATE",
        "DATETIME",
        "TIMESTAMP",
        "TIME",
        "YEAR",
        "MONTH",
        "DAY",
        "HOUR",
        "MINUTE",
        "SECOND",
        "BOOLEAN",
        "BOOL",
    ],
    "control": [
        "GRANT",
        "REVOKE",
        "COMMIT",
        "ROLLBACK",
        "SAVEPOINT",
        "START",
        "TRANSACTION",
        "BEGIN",
        "USE",
        "SHOW",
        "DESCRIBE",
        "EXPLAIN",
    ],
}


def get_all_keywords() -> tuple[str, ...]:
    """Flatten SQL_KEYWORDS in declaration order without duplicates."""
    keywords: list[str] = []
    for category in SQL_KEYWORDS.values():
        keywords.extend(category)
    return tuple(dict.fromkeys(keywords))


DEFAULT_KEYWORDS: tuple[str, ...] = get_all_keywords()
