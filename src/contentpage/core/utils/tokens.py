"""Shared markdown-it token utilities"""


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def block_span(tokens: list, i: int) -> int:
    """Return the index of the token closing the top-level block opened at i."""
    if tokens[i].nesting != 1:
        return i
    for j in range(i + 1, len(tokens)):
        if tokens[j].level == tokens[i].level and tokens[j].nesting == -1:
            return j
    return len(tokens) - 1
