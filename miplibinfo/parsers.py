from __future__ import annotations

import logging
from typing import Container, Dict, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .config import MIPLIB_URL
from .errors import InvalidIdentifierError, MalformedPageError
from .models import InstanceRecord, Number, SizePair
from .utils import to_number

logger = logging.getLogger(__name__)

SIZE_KEYS = (
    "variables",
    "binaries",
    "integers",
    "continuous",
    "constraints",
    "nonzero_density",
)

CONSTRAINT_KEYS = (
    "aggregations",
    "precedence",
    "variable_bound",
    "set_partitioning",
    "set_packing",
    "set_covering",
    "cardinality",
    "invariant_knapsack",
    "equation_knapsack",
    "bin_packing",
    "knapsack",
    "integer_knapsack",
    "mixed_binary",
)

STATS_ID = "instance-statistics"


def _base(base_url: str) -> str:
    return base_url if base_url.endswith("/") else base_url + "/"


def instance_url(name: str, base_url: str = MIPLIB_URL) -> str:
    return urljoin(_base(base_url), f"instance_details_{name}.html")


def metric_key(label: str) -> str:
    return label.strip().replace(" ", "_", 1).lower()


def _cells(row: Tag) -> List[Tag]:
    return row.find_all("td", recursive=False)


def _body_rows(table: Tag) -> List[Tag]:
    body = table.find("tbody", recursive=False) or table
    return [row for row in body.find_all("tr", recursive=False) if _cells(row)]


def _coerce(name: str, text: str) -> Number:
    try:
        return to_number(text)
    except ValueError:
        raise MalformedPageError(f"Instance {name}: non-numeric value {text.strip()!r}") from None


def parse_tags(soup: BeautifulSoup) -> List[str]:
    heading = soup.find("h3")
    if heading is None:
        return []
    return [a.get_text().strip() for a in heading.find_all("a", recursive=False)]


def parse_metric_table(name: str, block: Tag) -> Dict[str, SizePair]:
    table = block.find("table", recursive=False)
    if table is None:
        raise MalformedPageError(f"Instance {name}: statistics table not found")
    metrics: Dict[str, SizePair] = {}
    for row in _body_rows(table):
        cells = _cells(row)
        if len(cells) < 3:
            raise MalformedPageError(f"Instance {name}: statistics row has {len(cells)} cells")
        metrics[metric_key(cells[0].get_text())] = SizePair(
            original=_coerce(name, cells[1].get_text()),
            presolved=_coerce(name, cells[2].get_text()),
        )
    return metrics


def _status_rows(name: str, stats: Tag) -> List[Tag]:
    summary = stats.find_previous_sibling()
    if summary is None:
        raise MalformedPageError(f"Instance {name}: status table not found")
    rows = summary.select("table > tbody > tr")
    if not rows:
        rows = [row for row in summary.select("table tr") if _cells(row)]
    if not rows:
        raise MalformedPageError(f"Instance {name}: status table not found")
    return rows


def extract_instance(
    name: str,
    html: str | bytes,
    catalog: Container[str],
    base_url: str = MIPLIB_URL,
) -> InstanceRecord:
    if name not in catalog:
        raise InvalidIdentifierError(name)

    soup = BeautifulSoup(html, "html.parser")

    tags = parse_tags(soup)
    is_infeasible = "infeasible" in tags
    is_benchmark = "benchmark" in tags
    has_known_solution = "no_solution" not in tags

    stats = soup.find(id=STATS_ID)
    if stats is None:
        raise MalformedPageError(f"Instance {name}: #{STATS_ID} not found")
    blocks = soup.select(f"#{STATS_ID} > div > div")
    if not blocks:
        raise MalformedPageError(f"Instance {name}: statistics blocks not found")
    size = parse_metric_table(name, blocks[0])
    constraints = parse_metric_table(name, blocks[-1])

    rows = _status_rows(name, stats)
    if len(rows) > 1:
        logger.debug("Instance %s: %d status rows, keeping the last", name, len(rows))
    cells = _cells(rows[-1])
    if len(cells) < 8:
        raise MalformedPageError(f"Instance {name}: status row has {len(cells)} cells")

    status = cells[4].get_text().strip()
    token = cells[6].get_text().strip().lower().rstrip("*")
    is_unbounded = token == "unbounded"

    link = cells[7].find("a")
    href = link.get("href") if link is not None else None
    if not href:
        raise MalformedPageError(f"Instance {name}: download link not found")
    url_download = urljoin(_base(base_url), href.strip())

    objective: Number | None = None
    if not is_infeasible and not is_unbounded and has_known_solution:
        objective = _coerce(name, token)
    is_optimal = objective is not None and status != "open"

    return InstanceRecord(
        name=name,
        status=status,
        objective=objective,
        is_infeasible=is_infeasible,
        is_unbounded=is_unbounded,
        is_optimal=is_optimal,
        is_benchmark=is_benchmark,
        size=size,
        constraints=constraints,
        tags=tuple(tags),
        url_download=url_download,
        url_info=instance_url(name, base_url),
    )
