"""CLI entrypoint: Typer app definition and command registration"""

import typer

from gitbook2wiki.cli.commands import convert_cmd, version_cmd


app = typer.Typer(name="gitbook2wiki", no_args_is_help=True, help="Convert a GitBook tree into a GitHub wiki")

app.command(name="convert")(convert_cmd)
app.command(name="version")(version_cmd)
