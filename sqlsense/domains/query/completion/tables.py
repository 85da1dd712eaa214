"""Table reference extraction.

Best-effort scan for the tables a statement reads from; used only to narrow
column suggestions. Aliases, subqueries and quoted identifiers are not
tracked.
"""

from __future__ import annotations

import re

_TABLE_REF_RE = re.compile(r"(?:FROM|JOIN)\s+([A-Z0-9_]+)")


def extract_tables_from_query(sql: str) -> list[str]:
    """Return lowercased table names following FROM or JOIN, in order.

    Duplicates are kept; callers test membership.

    Examples:
        >>> extract_tables_from_query("SELECT a FROM Users u JOIN Orders o ON u.id=o.uid")
        ['users', 'orders']
    """
    return [match.group(1).lower() for match in _TABLE_REF_RE.finditer(sql.upper())]
