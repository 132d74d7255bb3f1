"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdgen.cli.commands import convert_cmd, plan_cmd


app = typer.Typer(name="mdgen", no_args_is_help=True, help="Markdown to Kotlin page conversion")

app.command(name="convert")(convert_cmd)
app.command(name="plan")(plan_cmd)
