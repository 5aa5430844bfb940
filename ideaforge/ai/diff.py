"""Structural JSON diff.

Produces a flat list of ``{path, before, after}`` entries between two
JSON-compatible values. Paths use dotted keys and bracketed indices
(``apiSpec.endpoints[2].path``); the root path is the empty string.
"""

from typing import Any, List, Optional, TypedDict


class DiffEntry(TypedDict):
    path: str
    before: Any
    after: Any


class _Missing:
    """Marker for an absent list element or object key."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def _join_key(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _join_index(path: str, index: int) -> str:
    return f"{path}[{index}]"


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _same_leaf(a: Any, b: Any) -> bool:
    # True == 1 in Python; JSON keeps booleans and numbers apart
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _visible(value: Any) -> Any:
    return None if value is MISSING else value


def _walk(before: Any, after: Any, path: str, out: List[DiffEntry]) -> None:
    if isinstance(before, dict) and isinstance(after, dict):
        keys = list(before)
        keys.extend(k for k in after if k not in before)
        for key in keys:
            _walk(
                before.get(key, MISSING),
                after.get(key, MISSING),
                _join_key(path, str(key)),
                out,
            )
        return

    if isinstance(before, list) and isinstance(after, list):
        for i in range(max(len(before), len(after))):
            _walk(
                before[i] if i < len(before) else MISSING,
                after[i] if i < len(after) else MISSING,
                _join_index(path, i),
                out,
            )
        return

    if _is_container(before) or _is_container(after):
        # Shape change: one entry for the whole subtree
        out.append({"path": path, "before": _visible(before), "after": _visible(after)})
        return

    if before is MISSING and after is MISSING:
        return
    if before is MISSING or after is MISSING or not _same_leaf(before, after):
        out.append({"path": path, "before": _visible(before), "after": _visible(after)})


def compute_json_diff(before: Any, after: Any, path: Optional[str] = None) -> List[DiffEntry]:
    """
    Diff two JSON values.

    Args:
        before: Original value
        after: Revised value
        path: Path prefix for reported entries (root when omitted)

    Returns:
        Entries in traversal order; empty when the values are equal
    """
    out: List[DiffEntry] = []
    _walk(before, after, path or "", out)
    return out
