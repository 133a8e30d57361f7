"""Helpers shared by the document assembly elements."""

from __future__ import annotations

from typing import Iterable


def parse_relationship_paths(paths: Iterable[str]) -> dict[str, list[str]]:
    """Group dotted include paths by their first relationship name.

    ``["author", "comments.author", "comments.article"]`` becomes
    ``{"author": [], "comments": ["author", "article"]}``.
    """
    tree: dict[str, list[str]] = {}
    for path in paths:
        primary, _, nested = path.partition(".")
        if not primary:
            continue
        children = tree.setdefault(primary, [])
        if nested and nested not in children:
            children.append(nested)
    return tree
