from __future__ import annotations

import typer

from xr.cli.commands.release_cmd import release


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Cross release: bump, commit, tag and push a multi-project repository.",
)

app.command()(release)


def main() -> None:
    app()
