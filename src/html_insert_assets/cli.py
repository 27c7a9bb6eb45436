#!/usr/bin/env python3
"""Command-line entry point for html-insert-assets."""

from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperCommand

from html_insert_assets.core import insert_assets
from html_insert_assets.errors import InsertAssetsError

RAW_ARGS = "html_insert_assets.raw_args"

app = typer.Typer(
    help="Inject <script> and <link> tags for built assets into an HTML document.",
    add_completion=False,
)
console = Console(stderr=True)


class RawArgsCommand(TyperCommand):
    """Keeps the untouched token list; click drops ``--`` from ``ctx.args``."""

    def parse_args(self, ctx, args):
        ctx.meta[RAW_ARGS] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=RawArgsCommand,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True, "help_option_names": []},
)
def run(ctx: typer.Context):
    """
    Insert asset tags and write the output document.

    Usage: html-insert-assets --html <path> --out <path> [--assets <path>...] [--roots <dir>...] [--strict] [--verbose]

    Arguments may also be read from a leading @flagfile, one token per line.
    """
    tokens: List[str] = ctx.meta.get(RAW_ARGS, list(ctx.args))
    try:
        code = insert_assets(tokens)
    except InsertAssetsError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]", highlight=False)
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[red]❌ I/O error: {escape(str(e))}[/red]", highlight=False)
        raise typer.Exit(code=1)
    raise typer.Exit(code=code)


def main():
    """Main entry point for the html-insert-assets CLI."""
    app()


if __name__ == "__main__":
    main()
