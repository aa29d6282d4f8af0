# normadb/utils/identifiers.py
"""PostgreSQL identifier normalization shared by the parser and dump extractor."""

import re

from normadb.utils.constants import DEFAULT_SCHEMA

# One identifier part: "quoted ""name""" or an unquoted word
IDENTIFIER_PART = r'(?:"(?:[^"]|"")+"|[^\W\d][\w$]*)'

QUALIFIED_NAME = rf"{IDENTIFIER_PART}(?:\s*\.\s*{IDENTIFIER_PART}){{0,2}}"

_PART_RE = re.compile(IDENTIFIER_PART)


def normalize_identifier(raw: str) -> str:
    """Normalize a single identifier token.

    Unquoted identifiers fold to lowercase; quoted identifiers keep their
    literal case with doubled quotes unescaped.

    Args:
        raw: The identifier as written in the DDL.

    Returns:
        The canonical identifier.
    """
    token = raw.strip()
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1].replace('""', '"')
    return token.lower()


def split_qualified_name(raw: str) -> tuple[str, str]:
    """Split a possibly schema-qualified name into (schema, table).

    Args:
        raw: A name such as ``users``, ``sales.orders`` or ``"Db"."S"."T"``.

    Returns:
        Tuple of normalized schema name and table name.
    """
    parts = [normalize_identifier(p) for p in _PART_RE.findall(raw.strip())]
    if not parts:
        return DEFAULT_SCHEMA, normalize_identifier(raw)
    if len(parts) == 1:
        return DEFAULT_SCHEMA, parts[0]
    return parts[-2], parts[-1]


def parse_identifier_list(raw: str) -> list[str]:
    """Parse a comma separated column list, without surrounding parentheses.

    Args:
        raw: Text such as ``student_id, "Course"``.

    Returns:
        Normalized identifiers in declared order.
    """
    names = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        # Index expressions may carry ordering hints: "a DESC"
        match = _PART_RE.match(item)
        names.append(normalize_identifier(match.group(0) if match else item))
    return names

