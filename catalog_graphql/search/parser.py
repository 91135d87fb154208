"""Search text normalization before it reaches the engine."""

import re

# Characters with special meaning in Lucene query syntax
_RESERVED = re.compile(r'[+\-=&|<>!(){}\[\]^"~*?:\\/]')


def parse_search_text(text: str, max_length: int = 128) -> str:
    """Drop reserved characters, collapse whitespace, cap the length."""
    cleaned = " ".join(_RESERVED.sub(" ", text).split())
    return cleaned[:max_length].rstrip()
