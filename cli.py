from __future__ import annotations

import logging
from datetime import datetime, timezone
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional
import tomllib

import typer

from dwc import (
    DatasetConfig,
    DescriptionRecord,
    DistributionRecord,
    PipelineError,
    SpeciesProfileRecord,
    TaxonRecord,
    WriteError,
    augment,
    map_descriptions,
    map_distributions,
    map_species_profiles,
    map_taxa,
)
from dwc.archive import create_archive
from io_utils.logs import setup_logging
from io_utils.read import compute_sha256, load_spreadsheet
from io_utils.write import write_dwc_tables, write_manifest


def load_config(config_path: Optional[Path]) -> Dict[str, Any]:
    cfg_path = resources.files("config").joinpath("config.default.toml")
    with cfg_path.open("rb") as f:
        config = tomllib.load(f)
    if config_path:
        with config_path.open("rb") as f:
            user_cfg = tomllib.load(f)
        _deep_update(config, user_cfg)
    return config


def _deep_update(d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict) and isinstance(d.get(k), dict):
            _deep_update(d[k], v)
        else:
            d[k] = v
    return d


def setup_run(
    input_path: Optional[Path],
    output: Optional[Path],
    config: Optional[Path],
    archive: Optional[bool],
) -> tuple[Dict[str, Any], Path, Path, bool]:
    """Prepare configuration and logging for a run.

    Paths not given on the command line fall back to the ``[input]`` and
    ``[output]`` sections of the configuration.
    """
    cfg = load_config(config)
    input_path = input_path or Path(cfg["input"]["path"])
    output = output or Path(cfg["output"]["dir"])
    if archive is None:
        archive = bool(cfg["output"].get("archive", False))
    try:
        setup_logging(output)
    except OSError as exc:
        raise WriteError(f"cannot create output directory {output}: {exc}") from exc
    return cfg, input_path, output, archive


def transform(records, dataset: DatasetConfig) -> Dict[type, List[Any]]:
    """Run the identifier generator and every table mapper."""
    augmented = augment(records, dataset)
    return {
        TaxonRecord: map_taxa(augmented, dataset),
        DistributionRecord: map_distributions(augmented, dataset),
        SpeciesProfileRecord: map_species_profiles(augmented, dataset),
        DescriptionRecord: map_descriptions(augmented, dataset),
    }


def write_outputs(
    output: Path,
    tables: Dict[type, List[Any]],
    meta: Dict[str, Any],
    archive: bool,
) -> Dict[str, int]:
    """Write all output artifacts for a run."""
    counts = write_dwc_tables(output, tables)
    meta["row_counts"] = counts
    write_manifest(output, meta)
    try:
        create_archive(output, compress=archive)
    except OSError as exc:
        raise WriteError(f"cannot write archive files: {exc}") from exc
    return counts


def process_cli(
    input_path: Optional[Path],
    output: Optional[Path],
    config: Optional[Path] = None,
    archive: Optional[bool] = None,
) -> Dict[str, int]:
    """Core processing logic used by the command line interface.

    Nothing but ``run.log`` is written until the whole spreadsheet has been
    loaded and mapped.
    """
    cfg, input_path, output, archive = setup_run(input_path, output, config, archive)
    dataset = DatasetConfig(**cfg.get("dataset", {}))
    run_id = datetime.now(timezone.utc).isoformat()

    records = load_spreadsheet(input_path)
    tables = transform(records, dataset)

    meta = {
        "run_id": run_id,
        "input": str(input_path),
        "input_sha256": compute_sha256(input_path),
        "source_rows": len(records),
        "dataset": dataset.model_dump(),
    }
    counts = write_outputs(output, tables, meta, archive)
    logging.info(
        "Processed %d source rows. Output written to %s | %s",
        len(records),
        output,
        ", ".join(f"{name}: {count}" for name, count in counts.items()),
    )
    return counts


app = typer.Typer(help="Alien plants checklist to Darwin Core converter")


@app.callback()
def main() -> None:
    """Alien plants checklist to Darwin Core converter."""


@app.command()
def run(
    input: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        dir_okay=False,
        file_okay=True,
        help="Checklist spreadsheet (defaults to [input].path)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        file_okay=False,
        dir_okay=True,
        help="Output directory (defaults to [output].dir)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file",
    ),
    archive: Optional[bool] = typer.Option(
        None,
        "--archive/--no-archive",
        help="Bundle the tables and meta.xml into dwca.zip",
    ),
) -> None:
    """Convert the checklist spreadsheet into Darwin Core CSV files."""
    try:
        counts = process_cli(input, output, config, archive)
    except PipelineError as e:
        logging.error("Run aborted: %s", e)
        typer.echo(f"❌ Run aborted at {e}", err=True)
        raise typer.Exit(1)

    for name, count in counts.items():
        typer.echo(f"✅ {name}: {count} rows")


if __name__ == "__main__":
    app()
