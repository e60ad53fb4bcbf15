"""Collection Ids — parse "(1,2,3)" route values and enforce all-or-nothing fetches.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Missing/blank ids value → ClientInputError("Parameter ids is null")
    - Duplicate ids collapse; requested order is kept for the first occurrence
    - A fetch is complete only when every distinct requested id was found
"""

from collections.abc import Iterable

from simpleblog.core.errors import ClientInputError, CollectionNotFoundError


def parse_ids(raw: str | None) -> list[int]:
    """Bind a comma-separated path value to a list of distinct integers."""
    if raw is None or not raw.strip():
        raise ClientInputError("Parameter ids is null")
    ids: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        try:
            value = int(part)
        except ValueError:
            raise ClientInputError(f"Parameter ids contains an invalid id: '{part}'")
        if value not in ids:
            ids.append(value)
    return ids


def missing_ids(requested: Iterable[int], found: Iterable[int]) -> list[int]:
    """Ids that were asked for but not returned by the store."""
    found_set = set(found)
    return [i for i in requested if i not in found_set]


def ensure_complete(
    resource: str, requested: list[int], found: Iterable[int],
) -> None:
    """Raise CollectionNotFoundError unless every requested id was found."""
    missing = missing_ids(requested, found)
    if missing:
        raise CollectionNotFoundError(resource, missing)
