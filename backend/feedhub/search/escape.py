"""
Escaping of keywords for SQL ``LIKE``/``ILIKE`` substring patterns.

``%`` matches any run of characters, ``_`` matches one character and ``\\``
escapes the next character. The same escape character must be given to the
database in the ``ESCAPE`` clause (see ``LIKE_ESCAPE_CHAR``).
"""

from __future__ import annotations

LIKE_ESCAPE_CHAR = "\\"
LIKE_MATCH_ANY = "%"
LIKE_MATCH_ONE = "_"


def escape_like(keyword: str) -> str:
    r"""
    Build a "contains" pattern that matches ``keyword`` literally.

    The escape character is escaped first so the backslashes added for ``%``
    and ``_`` are not escaped a second time.

    Examples:
        >>> escape_like("Go")
        '%Go%'
        >>> escape_like("100%")
        '%100\\%%'
        >>> escape_like("")
        '%%'
    """
    escaped = (
        keyword.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace(LIKE_MATCH_ANY, LIKE_ESCAPE_CHAR + LIKE_MATCH_ANY)
        .replace(LIKE_MATCH_ONE, LIKE_ESCAPE_CHAR + LIKE_MATCH_ONE)
    )
    return f"{LIKE_MATCH_ANY}{escaped}{LIKE_MATCH_ANY}"


def unescape_like(pattern: str) -> str:
    """Recover the keyword from a pattern produced by :func:`escape_like`."""
    if (
        len(pattern) < 2
        or not pattern.startswith(LIKE_MATCH_ANY)
        or not pattern.endswith(LIKE_MATCH_ANY)
    ):
        raise ValueError(f"not a contains pattern: {pattern!r}")

    body = pattern[1:-1]
    chars = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == LIKE_ESCAPE_CHAR:
            i += 1
            if i == len(body):
                raise ValueError(f"dangling escape character in pattern: {pattern!r}")
            char = body[i]
        chars.append(char)
        i += 1
    return "".join(chars)
