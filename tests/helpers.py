from __future__ import annotations

from typing import Dict, Iterable, Tuple

import requests


SIZE_ROWS = [
    ("Variables", "10", "8"),
    ("Binaries", "6", "5"),
    ("Integers", "0", "0"),
    ("Continuous", "4", "3"),
    ("Constraints", "12", "9"),
    ("Nonzero Density", "0.25", "0.3"),
]

CONSTRAINT_ROWS = [
    ("Aggregations", "0", "0"),
    ("Precedence", "1", "1"),
    ("Variable Bound", "2", "1"),
    ("Set Partitioning", "3", "3"),
    ("Set Packing", "0", "0"),
    ("Set Covering", "0", "0"),
    ("Cardinality", "0", "0"),
    ("Invariant Knapsack", "0", "0"),
    ("Equation Knapsack", "0", "0"),
    ("Bin Packing", "0", "0"),
    ("Knapsack", "4", "2"),
    ("Integer Knapsack", "0", "0"),
    ("Mixed Binary", "2", "2"),
]


def _rows(rows: Iterable[Tuple[str, str, str]]) -> str:
    return "\n".join(
        f"<tr><td> {label} </td><td>{orig}</td><td>{pre}</td></tr>" for label, orig, pre in rows
    )


def build_page(
    name: str = "inst-a",
    tags: Iterable[str] = ("benchmark", "binary"),
    status: str = "easy",
    objective: str = "123.45",
) -> str:
    tag_links = " ".join(f'<a href="tag_{t}.html">{t}</a>' for t in tags)
    return f"""
<html>
<body>
<h1>{name}</h1>
<h3>Tags: {tag_links}</h3>
<h3>Other heading <a href="x.html">ignored</a></h3>
<div class="summary">
  <table>
    <thead><tr><th>Instance</th><th>Ex</th><th>Cols</th><th>Rows</th><th>Status</th>
    <th>Group</th><th>Objective</th><th>Download</th></tr></thead>
    <tbody>
      <tr><td>{name}</td><td>1</td><td>10</td><td>12</td><td>{status}</td><td>grp</td>
      <td> {objective} </td><td><a href="WebData/instances/{name}.mps.gz">{name}.mps.gz</a></td></tr>
    </tbody>
  </table>
</div>
<div id="instance-statistics">
  <div>
    <div>
      <table>
        <thead><tr><th>Size</th><th>Original</th><th>Presolved</th></tr></thead>
        <tbody>
{_rows(SIZE_ROWS)}
        </tbody>
      </table>
    </div>
    <div>
      <table>
        <thead><tr><th>Type</th><th>Original</th><th>Presolved</th></tr></thead>
        <tbody>
{_rows(CONSTRAINT_ROWS)}
        </tbody>
      </table>
    </div>
  </div>
</div>
</body>
</html>
"""


class FakeResponse:
    def __init__(self, status_code: int, body: str | bytes):
        self.status_code = status_code
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i : i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """Serves canned responses; a value of None raises a connection error."""

    def __init__(self, responses: Dict[str, Tuple[int, str | bytes] | None]):
        self.responses = responses
        self.requested: list[str] = []
        self.closed = False

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.requested.append(url)
        if url not in self.responses:
            return FakeResponse(404, "not found")
        entry = self.responses[url]
        if entry is None:
            raise requests.ConnectionError(f"connection refused: {url}")
        return FakeResponse(*entry)

    def close(self) -> None:
        self.closed = True

    @classmethod
    def serving(cls, responses):
        """Factory handing the same session to every thread."""
        session = cls(responses)
        return lambda: session
