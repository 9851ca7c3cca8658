"""CLI entry point: jmeter-stage.

Subcommands:
    jmeter-stage stage deps.json --work-dir target/jmeter    # Build the working tree
    jmeter-stage classify deps.json                          # Dry run, print roles
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from jmeter_stage.classifier import classify
from jmeter_stage.config import StagingConfig
from jmeter_stage.core.logging import setup_logging
from jmeter_stage.exceptions import StagingError
from jmeter_stage.models.dependency import Role
from jmeter_stage.schemas import load_manifest
from jmeter_stage.stager import stage

_ROLE_LABELS = {
    Role.ENGINE_CONFIG_BUNDLE: "bin (unpacked)",
    Role.ENGINE_CORE_BINARY: "bin",
    Role.ENGINE_EXTENSION: "lib/ext",
    Role.PLAIN_LIBRARY: "lib",
    Role.SKIP: "-",
}


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """jmeter-stage: prepare an isolated JMeter working tree from resolved dependencies."""
    setup_logging("DEBUG" if verbose else None)


@main.command("stage")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--work-dir", type=click.Path(path_type=Path), default=None, help="Working tree root")
@click.option("--results-dir", default=None, help="Results directory override")
@click.option("--log-config-filename", default=None, help="Advanced logging file name")
@click.option(
    "--test-files-dir", type=click.Path(path_type=Path), default=None, help="Test files directory"
)
@click.option("--plugin", "plugins", multiple=True, help="group:artifact to stage into lib/ext")
@click.option(
    "--results-format",
    type=click.Choice(["xml", "csv"], case_sensitive=False),
    default=None,
    help="JMeter results file format",
)
@click.option("--skip-tests", is_flag=True, help="Skip staging entirely")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stage_cmd(
    manifest: Path,
    work_dir: Path | None,
    results_dir: str | None,
    log_config_filename: str | None,
    test_files_dir: Path | None,
    plugins: tuple[str, ...],
    results_format: str | None,
    skip_tests: bool,
    as_json: bool,
) -> None:
    """Create and populate the JMeter working tree described by MANIFEST."""
    try:
        config = StagingConfig.from_env(
            work_dir=work_dir,
            results_directory=results_dir,
            log_config_filename=log_config_filename,
            test_files_directory=test_files_dir,
            jmeter_plugins=list(plugins) or None,
            results_file_format=results_format,
            skip_tests=skip_tests or None,
        )
        if config.skip_tests:
            click.echo("Tests are skipped.")
            return
        resolution = load_manifest(manifest)
        result = stage(config, resolution, base_dir=manifest.parent)
    except StagingError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        payload = {
            "tree": result.tree.as_dict(),
            "placements": [
                {
                    "dependency": str(p.dependency),
                    "role": p.role.value,
                    "destination": str(p.destination) if p.destination else None,
                }
                for p in result.placements
            ],
            "jmeter_properties": result.jmeter_properties,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo("JMeter working tree:")
    for name, path in result.tree.as_dict().items():
        click.echo(f"  {name}: {path}")
    staged = [p for p in result.placements if p.role is not Role.SKIP]
    click.echo(f"\nStaged {len(staged)} of {len(result.placements)} dependencies")


@main.command("classify")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--plugin", "plugins", multiple=True, help="group:artifact to stage into lib/ext")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def classify_cmd(manifest: Path, plugins: tuple[str, ...], as_json: bool) -> None:
    """Print the role of every dependency in MANIFEST without touching the disk."""
    try:
        config = StagingConfig.from_env(jmeter_plugins=list(plugins) or None)
        resolution = load_manifest(manifest)
    except StagingError as e:
        raise click.ClickException(str(e)) from e

    declarations = resolution.plugin_declarations()
    rows = [
        (dep, classify(dep, declarations, config.jmeter_plugins))
        for dep in resolution.dependency_records(manifest.parent)
    ]

    if as_json:
        click.echo(json.dumps([{"dependency": str(d), "role": r.value} for d, r in rows], indent=2))
        return

    for dep, role in rows:
        click.echo(f"  {str(dep):<60} {_ROLE_LABELS[role]}")


if __name__ == "__main__":
    main()
