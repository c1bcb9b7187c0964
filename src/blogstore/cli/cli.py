"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blogstore.cli.commands import check_cmd, export_cmd, list_cmd, main_callback


app = typer.Typer(name="blogstore", no_args_is_help=True, help="Blog post and page document store")

app.callback()(main_callback)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="export")(export_cmd)
