"""Command-line interface for Abyss.

This module defines the CLI commands using Click framework.
It provides commands for creating new projects, building sites, and adding content.

Commands:
- new: Scaffold a new Abyss project.
- build: Build the site into the output directory.
- post: Create a new post or echo entry interactively.
"""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path

import click
import questionary

from . import __version__
from .content import ECHO, POSTS
from .utils import parse_week, titleize

# Path to the bundled project scaffold
_SCAFFOLD_DIR = Path(__file__).parent / "scaffold"


@click.group()
@click.version_option(version=__version__, prog_name="abyss")
def cli():
    """Abyss static site builder."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Abyss project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Abyss site created at {target}")


@cli.command()
@click.option("--drafts", is_flag=True, help="Include draft content")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on unresolved template placeholders (overrides abyss.yaml)",
)
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Directory to write the site to (overrides abyss.yaml output_dir)",
)
def build(drafts: bool, strict: bool | None, output: Path | None):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    click.echo("Building Abyss...")
    try:
        result = build_site(
            project_root,
            include_drafts=drafts,
            strict=strict,
            output_dir_override=output.resolve() if output else None,
        )
    except BuildError as exc:
        # Display user-friendly error message
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        rel_path = _display_path(exc.source_path, project_root)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    for rel_path in result.written:
        click.echo(f"  ✓ {rel_path.as_posix()}")
    echo_count = len(result.echo)
    click.echo(
        click.style("Done.", fg="green", bold=True)
        + f" {len(result.posts)} post(s), {echo_count} echo "
        + ("entry" if echo_count == 1 else "entries")
        + " built."
    )


@cli.command()
def post():
    """Create a new post or echo entry interactively."""
    project_root = Path.cwd()
    from .build import load_config

    config = load_config(project_root)
    content_dir = project_root / str(config["content_dir"])

    collection = questionary.select(
        "Collection:",
        choices=[POSTS, ECHO],
        style=_questionary_style(),
    ).ask()

    if collection is None:
        raise click.Abort()

    target_dir = content_dir / collection
    next_week = _next_week(target_dir) if collection == ECHO else None
    default_name = f"week-{next_week:02d}" if next_week is not None else ""

    # Get filename from user
    name = questionary.text(
        "Filename (without .md extension):",
        default=default_name,
        validate=lambda x: len(x.strip()) > 0 or "Filename cannot be empty",
        style=_questionary_style(),
    ).ask()

    if name is None:
        raise click.Abort()

    name = name.strip()
    today = datetime.now().strftime("%Y-%m-%d")
    if collection == POSTS:
        # Posts carry a date prefix so file listings match the index order
        filename = f"{today}-{name}.md"
    else:
        filename = f"{name}.md"

    target_path = target_dir / filename
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {_display_path(target_path, project_root)}"
        )

    title = questionary.text(
        "Title:",
        default=titleize(name),
        style=_questionary_style(),
    ).ask()

    if title is None:
        raise click.Abort()

    metadata = {"title": title.strip() or titleize(name), "date": today}
    if collection == POSTS:
        content_type = questionary.select(
            "Type:",
            choices=["prose", "poem"],
            style=_questionary_style(),
        ).ask()
        if content_type is None:
            raise click.Abort()
        metadata["type"] = content_type
    else:
        metadata["week"] = str(next_week)

    target_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in metadata.items())
    lines.extend(["---", "", ""])
    target_path.write_text("\n".join(lines), encoding="utf-8")

    click.echo(f"Created {_display_path(target_path, project_root)}")


def _next_week(folder: Path) -> int:
    """Return one more than the highest week number in an echo folder."""
    from .frontmatter import split_frontmatter

    highest = 0
    if folder.is_dir():
        for path in folder.glob("*.md"):
            document = split_frontmatter(path.read_text(encoding="utf-8"))
            highest = max(highest, parse_week(document.metadata.get("week")))
    return highest + 1


def _display_path(path: Path, project_root: Path) -> str:
    """Return path relative to the project root when it lies inside it."""
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return str(path)


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Abyss project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _SCAFFOLD_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SCAFFOLD_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
