"""
Keyword parsing for free-text search input.
"""

from __future__ import annotations

from typing import List

from feedhub.core.exceptions import EmptyInputError, KeywordTooLongError, TooManyKeywordsError

from .limits import DEFAULT_MAX_KEYWORD_COUNT, DEFAULT_MAX_KEYWORD_LENGTH


def parse_keywords(
    text: str,
    max_count: int = DEFAULT_MAX_KEYWORD_COUNT,
    max_length: int = DEFAULT_MAX_KEYWORD_LENGTH,
) -> List[str]:
    """
    Split ``text`` into an ordered list of keywords.

    Runs of whitespace (spaces, tabs, newlines) separate keywords; leading and
    trailing whitespace is ignored. Keywords keep their original case and the
    order in which they appear.

    Raises:
        EmptyInputError: no keyword remains after splitting.
        TooManyKeywordsError: more than ``max_count`` keywords.
        KeywordTooLongError: a keyword is longer than ``max_length`` characters.
            Length is counted in code points, so ``"日本語"`` has length 3.

    Example:
        >>> parse_keywords("  Go   React ")
        ['Go', 'React']
    """
    keywords = (text or "").split()
    if not keywords:
        raise EmptyInputError()

    if len(keywords) > max_count:
        raise TooManyKeywordsError(len(keywords), max_count)

    for keyword in keywords:
        # str length is the number of code points
        if len(keyword) > max_length:
            raise KeywordTooLongError(keyword, max_length)

    return keywords
