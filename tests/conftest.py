"""Shared fixtures: a representative style-guide content page"""

import pytest

from contentpage.core.parse import parse


SAMPLE_PAGE = """\
---
title: Coding Style
date: 2019-03-04
weight: 5
---

# Coding Style

Keep functions short. See [the manual](https://example.org/manual "Manual").

1. Use tabs for indentation.
2. Limit lines to 80 columns.

- Braces on the same line
- No typedefs for structs

> Debugging is twice as hard as writing the code in the first place.
>
> — Brian Kernighan

```c
if (x < 10 && y > 2) {
\treturn "ok";
}
```
"""

SAMPLE_CODE = 'if (x < 10 && y > 2) {\n\treturn "ok";\n}\n'


def make_page(title: str, weight=None, body: str = "Body.\n", extra: str = "") -> str:
    """Build content page text with the given front matter values."""
    lines = ["---", f"title: {title}"]
    if weight is not None:
        lines.append(f"weight: {weight}")
    if extra:
        lines.append(extra)
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_PAGE


@pytest.fixture(name="sample_page")
def sample_page_fixture():
    return parse(SAMPLE_PAGE, "content/coding-style.md")


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """A small content tree: two weighted pages, a nested page, a draft, and a malformed file."""
    root = tmp_path / "content"
    (root / "guide").mkdir(parents=True)
    (root / "style.md").write_text(make_page("Style", 10), encoding="utf-8")
    (root / "intro.md").write_text(make_page("Intro", 5), encoding="utf-8")
    (root / "guide" / "tools.md").write_text(make_page("Tools", 1), encoding="utf-8")
    (root / "wip.md").write_text(make_page("Work in progress", 2, extra="draft: true"), encoding="utf-8")
    (root / "broken.md").write_text("---\ntitle: Broken\n\n# No closing marker\n", encoding="utf-8")
    return root


@pytest.fixture(name="page_text")
def page_text_fixture():
    return make_page


@pytest.fixture(name="sample_code")
def sample_code_fixture():
    return SAMPLE_CODE
