# src/stratified_tank/constants/base.py
from __future__ import annotations
from dataclasses import dataclass, replace
from contextlib import contextmanager
from typing import Any, Iterator

@dataclass(frozen=True)
class FrozenNamespace:
    """Immutable bag of constants."""

@contextmanager
def override(obj: Any, **updates: Any) -> Iterator[Any]:
    """
    Temporarily create a modified copy of a FrozenNamespace.
    Usage:
        with override(TANK, bucket_volume=250) as T: ...
    """
    yield replace(obj, **updates)
