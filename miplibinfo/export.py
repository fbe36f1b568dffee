from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from .models import InstanceRecord
from .parsers import CONSTRAINT_KEYS, SIZE_KEYS
from .utils import format_number

# CSV column prefix for each metric key.
SIZE_COLUMNS = {
    "variables": "VARIABLES",
    "binaries": "BINARIES",
    "integers": "INTEGERS",
    "continuous": "CONTINUOUS",
    "constraints": "CONSTRAINTS",
    "nonzero_density": "NONZERO.DENSITY",
}

CONSTRAINT_COLUMNS = {
    "aggregations": "AGGREGATION",
    "precedence": "PRECEDENCE",
    "variable_bound": "VARIABLE.BOUND",
    "set_partitioning": "SET.PARTITIONING",
    "set_packing": "SET.PACKING",
    "set_covering": "SET.COVERING",
    "cardinality": "CARDINALITY",
    "invariant_knapsack": "INVARIANT.KNAPSACK",
    "equation_knapsack": "EQUATION.KNAPSACK",
    "bin_packing": "BINPACKING",
    "knapsack": "KNAPSACK",
    "integer_knapsack": "INTEGER.KNAPSACK",
    "mixed_binary": "MIXED.BINARY",
}

CSV_HEADER = (
    ["NAME", "STATUS", "OBJECTIVE", "IS.INFEASIBLE", "IS.UNBOUNDED", "IS.OPTIMAL", "IS.BENCHMARK"]
    + [f"{SIZE_COLUMNS[k]}.{suffix}" for k in SIZE_KEYS for suffix in ("ORIGINAL", "PRESOLVED")]
    + [f"{CONSTRAINT_COLUMNS[k]}.{suffix}" for k in CONSTRAINT_KEYS for suffix in ("ORIGINAL", "PRESOLVED")]
    + ["TAGS", "URL.INFO", "URL.DOWNLOAD"]
)

TAG_SEPARATOR = ";"


def to_json(records: Iterable[InstanceRecord]) -> str:
    return json.dumps([rec.to_dict() for rec in records], indent=2, ensure_ascii=False)


def from_json(text: str) -> List[InstanceRecord]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of instance records")
    return [InstanceRecord.from_dict(item) for item in data]


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _plain(value: str) -> str:
    if any(ch in value for ch in ',"\r\n'):
        return _quote(value)
    return value


def _metrics(metrics, keys) -> List[str]:
    fields = []
    for key in keys:
        pair = metrics.get(key)
        if pair is None:
            fields.extend(["", ""])
        else:
            fields.extend([format_number(pair.original), format_number(pair.presolved)])
    return fields


def csv_row(rec: InstanceRecord) -> List[str]:
    return (
        [
            _quote(rec.name),
            _plain(rec.status),
            format_number(rec.objective),
            format_number(rec.is_infeasible),
            format_number(rec.is_unbounded),
            format_number(rec.is_optimal),
            format_number(rec.is_benchmark),
        ]
        + _metrics(rec.size, SIZE_KEYS)
        + _metrics(rec.constraints, CONSTRAINT_KEYS)
        + [
            _quote(TAG_SEPARATOR.join(rec.tags)),
            _quote(rec.url_info),
            _quote(rec.url_download),
        ]
    )


def to_csv(records: Iterable[InstanceRecord]) -> str:
    lines = [",".join(CSV_HEADER)]
    for rec in records:
        lines.append(",".join(csv_row(rec)))
    return "\n".join(lines)


def write_json(records: Iterable[InstanceRecord], path: Path) -> None:
    path.write_text(to_json(records), encoding="utf-8")


def write_csv(records: Iterable[InstanceRecord], path: Path) -> None:
    path.write_text(to_csv(records), encoding="utf-8", newline="")
