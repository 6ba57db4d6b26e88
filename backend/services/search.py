"""Shader search filters.

Filters narrow the list in sequence (q, then tag, then platform). A record
whose field is missing or of the wrong type simply does not match.
"""

from typing import Any, Iterable

ALL_TAGS = "All"


def _title_matches(shader: Any, needle: str) -> bool:
    title = shader.get("title") if isinstance(shader, dict) else None
    return isinstance(title, str) and needle in title.casefold()


def _contains(shader: Any, field: str, value: str) -> bool:
    values = shader.get(field) if isinstance(shader, dict) else None
    return isinstance(values, (list, tuple, set, frozenset)) and value in values


def filter_shaders(
    shaders: Iterable[Any],
    q: str | None = None,
    tag: str | None = None,
    platform: str | None = None,
) -> list:
    """Return the shaders matching every given filter, in input order.

    Args:
        shaders: Shader records as fetched from the repository.
        q: Case-insensitive substring of the title.
        tag: Exact tag. "All" means no tag filter.
        platform: Platform name, compared against upper-case values.
    """
    results = list(shaders)

    if q:
        needle = q.casefold()
        results = [s for s in results if _title_matches(s, needle)]

    if tag and tag != ALL_TAGS:
        results = [s for s in results if _contains(s, "tags", tag)]

    if platform:
        wanted = platform.upper()
        results = [s for s in results if _contains(s, "platforms", wanted)]

    return results
