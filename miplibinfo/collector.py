from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .client import MiplibClient
from .errors import CatalogError
from .models import InstanceRecord

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


@dataclass
class DownloadFailure:
    name: str
    error: Exception


def instance_file_path(dest_dir: Path, name: str) -> Path:
    return dest_dir / f"{name}.mps.gz"


def collect_instances(
    client: MiplibClient,
    names: Iterable[str],
    jobs: int,
    progress: Optional[ProgressFn] = None,
) -> List[InstanceRecord]:
    """
    Fetch and parse every instance page in parallel.

    The first failure cancels the pending fetches and raises CatalogError.
    Results come back in the order of ``names``.
    """
    names = list(names)
    total = len(names)
    results: Dict[str, InstanceRecord] = {}

    executor = ThreadPoolExecutor(max_workers=max(1, jobs))
    try:
        futures = {executor.submit(client.get_instance_info, name): name for name in names}
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as exc:
                logger.debug("Instance %s failed: %s", name, exc)
                executor.shutdown(wait=False, cancel_futures=True)
                raise CatalogError(name, exc) from exc
            if progress is not None:
                progress(len(results), total)
    finally:
        executor.shutdown(wait=True)

    return [results[name] for name in names]


def download_instances(
    client: MiplibClient,
    records: Iterable[InstanceRecord],
    dest_dir: Path,
    jobs: int,
    progress: Optional[ProgressFn] = None,
) -> List[DownloadFailure]:
    """Download every instance file; failures are collected, not raised."""
    records = list(records)
    total = len(records)
    done = 0
    failures: List[DownloadFailure] = []

    with ThreadPoolExecutor(max_workers=max(1, jobs)) as executor:
        futures = {
            executor.submit(
                client.download, rec.name, rec.url_download, instance_file_path(dest_dir, rec.name)
            ): rec
            for rec in records
        }
        for future in as_completed(futures):
            rec = futures[future]
            try:
                future.result()
            except Exception as exc:
                logger.warning("Download of %s failed: %s", rec.name, exc)
                failures.append(DownloadFailure(rec.name, exc))
            done += 1
            if progress is not None:
                progress(done, total)

    return failures
