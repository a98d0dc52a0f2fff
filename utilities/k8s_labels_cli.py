# Copyright 2025 Xdynix
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command line front end for the label parsers.

Example:
    $ k8s-labels label honk/foo=bar
    honk/foo:bar
    $ k8s-labels labels --format either "tier:frontend env:prod" --json
    {"tier":"frontend","env":"prod"}
"""

__all__ = (
    "ListFormat",
    "app",
    "main",
)

import logging
from enum import StrEnum
from typing import Annotated, NoReturn

import typer
from k8s_labels import (
    LabelParseError,
    Labels,
    label_map_adapter,
    labels_to_map,
    parse_key,
    parse_label_env,
    parse_labels_csv,
    parse_labels_either,
    parse_labels_env,
    parse_labels_wsv,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Validate Kubernetes label keys and parse label lists.",
    no_args_is_help=True,
)


class ListFormat(StrEnum):
    CSV = "csv"
    WSV = "wsv"
    EITHER = "either"
    ENV = "env"


LIST_PARSERS = {
    ListFormat.CSV: parse_labels_csv,
    ListFormat.WSV: parse_labels_wsv,
    ListFormat.EITHER: parse_labels_either,
    ListFormat.ENV: parse_labels_env,
}


def fail(error: LabelParseError) -> NoReturn:
    typer.echo(str(error), err=True)
    raise typer.Exit(code=1)


@app.callback()
def configure(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log rejected inputs."),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("label")
def label_command(
    text: Annotated[str, typer.Argument(help="A single `key=value` label.")],
) -> None:
    """Parse one `key=value` label and print it as `key:value`."""
    try:
        label = parse_label_env(text)
    except LabelParseError as e:
        fail(e)
    typer.echo(f"{label.key}:{label.value}")


@app.command("labels")
def labels_command(
    text: Annotated[str, typer.Argument(help="A list of labels.")],
    list_format: Annotated[
        ListFormat,
        typer.Option("--format", "-f", help="How the labels are separated."),
    ] = ListFormat.EITHER,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print a JSON object; the last duplicate wins."),
    ] = False,
) -> None:
    """Parse a list of labels and print one `key:value` per line."""
    try:
        labels: Labels = LIST_PARSERS[list_format](text)
    except LabelParseError as e:
        fail(e)

    logger.debug("parsed %d label(s) as %s", len(labels), list_format)
    if as_json:
        typer.echo(label_map_adapter.dump_json(labels_to_map(labels)).decode())
        return
    for label in labels:
        typer.echo(f"{label.key}:{label.value}")


@app.command("key")
def key_command(
    text: Annotated[str, typer.Argument(help="A label or annotation key.")],
) -> None:
    """Parse a key and print its prefix and name."""
    try:
        key = parse_key(text)
    except LabelParseError as e:
        fail(e)
    typer.echo(f"prefix: {key.prefix if key.has_prefix else '-'}")
    typer.echo(f"name: {key.name}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
