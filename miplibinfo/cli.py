from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .catalog import load_catalog
from .client import MiplibClient
from .collector import collect_instances, download_instances
from .config import VERSION, load_config, write_default_config
from .errors import CatalogError
from .export import write_csv, write_json
from .utils import ensure_dir, progress_text

app = typer.Typer(
    add_completion=False,
    help="Get information about MIPLIB 2017 instances and optionally download them.",
)


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(VERSION)
        raise typer.Exit()


def _progress(label: str):
    def report(done: int, total: int) -> None:
        typer.echo(progress_text(label, done, total), nl=False)

    return report


def _done(label: str) -> None:
    typer.echo(f"\r{label}... Done!" + " " * 24)


@app.command()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
    download: Optional[Path] = typer.Option(
        None, "--download", metavar="PATH", help="If set, download instance files into PATH."
    ),
    csv_only: bool = typer.Option(False, "--csv-only", help="Export instance data only to a CSV file."),
    json_only: bool = typer.Option(False, "--json-only", help="Export instance data only to a JSON file."),
    jobs: Optional[int] = typer.Option(None, "--jobs", min=1, help="Parallel requests."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml."),
    write_config: bool = typer.Option(False, "--write-config", help="Write a default config.yaml and exit."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    setup_logging(debug)

    if csv_only and json_only:
        raise typer.BadParameter("--csv-only and --json-only are mutually exclusive")

    if write_config:
        target = config_path or Path.cwd() / "config.yaml"
        write_default_config(target)
        typer.echo(f"Wrote {target}")
        return

    config = load_config(config_path)
    catalog = load_catalog(config.catalog_path)
    jobs = jobs if jobs is not None else config.default_jobs

    if download is not None:
        ensure_dir(download)

    with MiplibClient(catalog, config.base_url, config.request_timeout) as client:
        try:
            records = collect_instances(client, catalog, jobs, _progress("Getting instance data"))
        except CatalogError as exc:
            typer.echo(f"\n{exc}")
            raise typer.Exit(code=1)
        _done("Getting instance data")

        if not csv_only:
            typer.echo("Exporting data to JSON... ", nl=False)
            write_json(records, config.json_path)
            typer.echo("Done!")

        if not json_only:
            typer.echo("Exporting data to CSV... ", nl=False)
            write_csv(records, config.csv_path)
            typer.echo("Done!")

        if download is None:
            return

        typer.echo(f"Downloading instance files to folder {download}...")
        failures = download_instances(
            client, records, download, jobs, _progress("Downloading instance files")
        )
        _done("Downloading instance files")

    for failure in failures:
        typer.echo(str(failure.error))
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
