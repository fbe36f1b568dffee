from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class SizePair:
    original: Number
    presolved: Number

    def to_dict(self) -> Dict[str, Number]:
        return {"original": self.original, "presolved": self.presolved}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SizePair":
        return cls(original=data["original"], presolved=data["presolved"])


@dataclass(frozen=True)
class InstanceRecord:
    """Metadata of one MIPLIB 2017 instance, as shown on its details page."""

    name: str
    status: str
    objective: Number | None
    is_infeasible: bool
    is_unbounded: bool
    is_optimal: bool
    is_benchmark: bool
    size: Mapping[str, SizePair] = field(default_factory=dict, hash=False)
    constraints: Mapping[str, SizePair] = field(default_factory=dict, hash=False)
    tags: Tuple[str, ...] = ()
    url_download: str = ""
    url_info: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", MappingProxyType(dict(self.size)))
        object.__setattr__(self, "constraints", MappingProxyType(dict(self.constraints)))
        object.__setattr__(self, "tags", tuple(self.tags))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "objective": self.objective,
            "is_infeasible": self.is_infeasible,
            "is_unbounded": self.is_unbounded,
            "is_optimal": self.is_optimal,
            "is_benchmark": self.is_benchmark,
            "size": {key: pair.to_dict() for key, pair in self.size.items()},
            "constraints": {key: pair.to_dict() for key, pair in self.constraints.items()},
            "tags": list(self.tags),
            "url_download": self.url_download,
            "url_info": self.url_info,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstanceRecord":
        return cls(
            name=data["name"],
            status=data.get("status", ""),
            objective=data.get("objective"),
            is_infeasible=bool(data.get("is_infeasible", False)),
            is_unbounded=bool(data.get("is_unbounded", False)),
            is_optimal=bool(data.get("is_optimal", False)),
            is_benchmark=bool(data.get("is_benchmark", False)),
            size={k: SizePair.from_dict(v) for k, v in (data.get("size") or {}).items()},
            constraints={k: SizePair.from_dict(v) for k, v in (data.get("constraints") or {}).items()},
            tags=tuple(data.get("tags") or ()),
            url_download=data.get("url_download", ""),
            url_info=data.get("url_info", ""),
        )
