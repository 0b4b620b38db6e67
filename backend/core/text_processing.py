import math
import re
from typing import Iterable, List, Optional

# Leading list markers a model tends to add: "-", "*", "•", "1.", "2)"
_LIST_MARKER = re.compile(r'^\s*(?:[-*•]+|\d+[.)])\s*')
_TERM_SEPARATORS = re.compile(r'[,\n;]')


def normalize_tags(values: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Lowercase, trim and deduplicate tags, keeping first-seen order."""
    if isinstance(values, str):
        values = [values]
    tags = []
    for value in values:
        if not isinstance(value, str):
            continue
        tag = value.strip().strip('"\'').strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
        if limit is not None and len(tags) >= limit:
            break
    return tags


def parse_term_list(raw: str, limit: Optional[int] = None) -> List[str]:
    """Split a comma or line delimited model answer into normalized terms."""
    if not raw:
        return []
    pieces = [_LIST_MARKER.sub('', piece).rstrip('.') for piece in _TERM_SEPARATORS.split(raw)]
    return normalize_tags(pieces, limit=limit)


def estimate_tokens(text: str) -> int:
    """Rough token estimate, about 4 characters per token."""
    return math.ceil(len(text) / 4)
