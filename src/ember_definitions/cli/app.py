import typer

from ember_definitions.cli.definition import definition
from ember_definitions.cli.serve import serve_app

app = typer.Typer(
    name="ember-definitions",
    help="Ember definitions CLI: find where models, transforms and imports are defined.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("definition")(definition)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
