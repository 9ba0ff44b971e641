from pathlib import Path
from typing import Annotated

import typer

from external_annotations.cli.annotations import annotate, find, name, show
from external_annotations.cli.dependencies import configure
from external_annotations.cli.roots import locate, roots_app, usage
from external_annotations.cli.serve import serve_mcp

app = typer.Typer(
    name="external-annotations",
    help="External annotations: annotate library symbols without touching their sources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _main(
    project: Annotated[
        Path | None,
        typer.Option(help="Project layout file. Defaults to $EXTERNAL_ANNOTATIONS_PROJECT_FILE."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log resolution details.")] = False,
) -> None:
    configure(project, verbose)


app.command("find")(find)
app.command("show")(show)
app.command("annotate")(annotate)
app.command("name")(name)
app.command("locate")(locate)
app.command("usage")(usage)
app.add_typer(roots_app, name="roots")
app.command("serve-mcp")(serve_mcp)


def main() -> None:
    app()
