"""Slugs double as output file names and URL segments, so they are ASCII only"""

import re
import unicodedata


_SEPARATOR_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """Fold text to a lowercase ASCII name with runs of other characters collapsed to '-'."""
    folded = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    folded = folded.lower().replace("'", '')
    return _SEPARATOR_RE.sub('-', folded).strip('-')
