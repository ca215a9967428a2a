"""Wiki-link pattern construction.

A note named ``b`` is referenced by any of::

    [[b]]  [[b|Alias]]  [[folder/sub/b]]  [[b#Heading]]  [[ b ]]

The basename is escaped, so ``a.b`` or ``c+d`` only ever match literally.
"""

import re
from typing import Pattern

_OPEN = r"\[\[\s*"
_PREFIX = r"(?:[^\]|]*/)?"
_ANCHOR = r"(?:#[^\]|]*)?"
_ALIAS = r"(?:\|[^\]]*)?"
_CLOSE = r"\s*\]\]"


def build_link_pattern(basename: str) -> Pattern[str]:
    """Return a case-insensitive pattern matching wiki-links to *basename*."""
    return re.compile(
        _OPEN + _PREFIX + re.escape(basename) + _ANCHOR + _ALIAS + _CLOSE,
        re.IGNORECASE,
    )

