"""depflip command line interface.

Commands:
  enable   - Uncomment a package declaration
  disable  - Comment out a package declaration
  update   - Set the declared version of a package
  add      - Declare a new package
  show     - List declared packages and their state
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from depflip.core.diff import combine_diffs
from depflip.core.results import BatchResult, ErrorResult, Result
from depflip.manifest.events import ChangeEvent
from depflip.manifest.target import ManifestTarget

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

DEFAULT_MANIFEST = Path("Cargo.toml")


@dataclass
class CliOptions:
    """Options shared by every command."""

    manifests: tuple[Path, ...]
    dry_run: bool = False

    def targets(self) -> list[ManifestTarget]:
        return [
            ManifestTarget(path, dry_run=self.dry_run, sink=echo_event)
            for path in self.manifests
        ]


def echo_event(event: ChangeEvent) -> None:
    """Show each change as it is applied."""
    logger.debug("%s %s in %s", event.action.value, event.package, event.file_path)
    click.echo(event.message)


def assert_unique(target: ManifestTarget, name: str) -> None:
    """Exit immediately if ``name`` is declared more than once in the manifest."""
    if len(target.find(name)) > 1:
        click.echo(f"Error: Package {name} occurs multiple times in file {target.path}", err=True)
        sys.exit(1)


def run_edit(
    options: CliOptions,
    name: str,
    edit: Callable[[ManifestTarget], Result],
    require_unique: bool = True,
) -> None:
    """Apply ``edit`` to every manifest and report the outcome.

    Uniqueness is checked in every manifest before any of them is edited,
    so a duplicate aborts the command with all files untouched.
    """
    targets = options.targets()
    if require_unique:
        for target in targets:
            assert_unique(target, name)

    batch = BatchResult()
    for target in targets:
        result = edit(target)
        batch.results.append(result)
        report(result, options.dry_run)
    logger.debug("Manifests changed: %s", ", ".join(str(p) for p in batch.files_changed))

    if options.dry_run and batch.diffs:
        console.print(Syntax(combine_diffs(batch.diffs), "diff"))

    if not batch:
        if len(batch) > 1:
            err_console.print(f"{len(batch.failed)} of {len(batch)} manifests failed")
        sys.exit(1)


def report(result: Result, dry_run: bool) -> None:
    if result.is_error():
        err_console.print(f"[red]Error:[/red] {escape(result.message)}")
        return
    logger.info(result.message)
    if dry_run and result.files_changed:
        console.print(escape(result.message))


@click.group()
@click.option(
    "--manifest",
    "-m",
    "manifests",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="DEPFLIP_MANIFEST",
    help="Manifest to edit; repeat for several (default: Cargo.toml)",
)
@click.option("--dry-run", is_flag=True, help="Show the changes without writing them")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, manifests: tuple[Path, ...], dry_run: bool, verbose: bool) -> None:
    """Toggle and update dependency declarations in manifest files.

    \b
    Examples:
        depflip disable serde
        depflip -m crates/core/Cargo.toml update tokio 1.38
        depflip --dry-run enable serde
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliOptions(manifests=manifests or (DEFAULT_MANIFEST,), dry_run=dry_run)


@main.command()
@click.argument("name")
@click.pass_obj
def enable(options: CliOptions, name: str) -> None:
    """Uncomment the declaration of NAME."""
    run_edit(options, name, lambda target: target.enable(name))


@main.command()
@click.argument("name")
@click.pass_obj
def disable(options: CliOptions, name: str) -> None:
    """Comment out the declaration of NAME."""
    run_edit(options, name, lambda target: target.disable(name))


@main.command()
@click.argument("name")
@click.argument("version")
@click.pass_obj
def update(options: CliOptions, name: str, version: str) -> None:
    """Set the declared version of NAME to VERSION."""
    run_edit(options, name, lambda target: target.update(name, version))


@main.command()
@click.argument("name")
@click.argument("version")
@click.option("--disabled", is_flag=True, help="Add the declaration commented out")
@click.pass_obj
def add(options: CliOptions, name: str, version: str, disabled: bool) -> None:
    """Declare NAME at VERSION."""
    run_edit(
        options,
        name,
        lambda target: target.add(name, version, disabled=disabled),
        require_unique=False,
    )


@main.command()
@click.pass_obj
def show(options: CliOptions) -> None:
    """List declared packages and whether they are enabled."""
    failed = False
    for target in options.targets():
        packages = target.packages()
        if isinstance(packages, ErrorResult):
            report(packages, options.dry_run)
            failed = True
            continue

        table = Table(title=str(target.path))
        table.add_column("Package")
        table.add_column("Version")
        table.add_column("State")
        for package, enabled in packages:
            state = "[green]enabled[/green]" if enabled else "[dim]disabled[/dim]"
            table.add_row(escape(package.name), escape(package.version), state)
        console.print(table)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
