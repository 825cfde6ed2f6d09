"""CLI entrypoint: Typer app definition and command registration"""

import typer

from contentpage.cli.commands import build_cmd, check_cmd, list_cmd, render_cmd


app = typer.Typer(name="contentpage", no_args_is_help=True, help="Front matter content page toolkit")

app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="render")(render_cmd)
