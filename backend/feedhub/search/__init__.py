"""
Search helpers: keyword parsing, LIKE escaping and predicate building.
"""

from .criteria import (  # noqa: F401
    date_range_criteria,
    equals_criteria,
    keyword_criteria,
    membership_criteria,
)
from .deadline import run_with_deadline  # noqa: F401
from .escape import LIKE_ESCAPE_CHAR, escape_like, unescape_like  # noqa: F401
from .keywords import parse_keywords  # noqa: F401
from .limits import (  # noqa: F401
    DEFAULT_MAX_KEYWORD_COUNT,
    DEFAULT_MAX_KEYWORD_LENGTH,
    DEFAULT_SEARCH_TIMEOUT_SECONDS,
    SearchLimits,
)
