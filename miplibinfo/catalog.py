from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Tuple

from .utils import load_yaml_or_json

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "instances.yaml"


class Catalog:
    """Ordered, read-only list of instance names."""

    def __init__(self, names: Iterable[str]):
        seen = set()
        ordered = []
        for name in names:
            name = str(name).strip()
            if name and name not in seen:
                seen.add(name)
                ordered.append(name)
        self._names: Tuple[str, ...] = tuple(ordered)
        self._lookup = frozenset(self._names)

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"Catalog({len(self._names)} instances)"


def load_catalog(path: Path | None = None) -> Catalog:
    path = path or DEFAULT_CATALOG_PATH
    data = load_yaml_or_json(path)
    names = data.get("instances")
    if not isinstance(names, list) or not names:
        raise ValueError(f"No instances listed in {path}")
    return Catalog(names)
