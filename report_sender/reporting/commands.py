"""GitHub workflow commands.

The runner parses ``::command key=value::message`` lines on stdout.
Outputs go to the file named by GITHUB_OUTPUT; runners too old to set it
still understand the deprecated ``::set-output`` command.
"""

import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return (
        escape_data(value)
        .replace(":", "%3A")
        .replace(",", "%2C")
    )


def issue_command(command: str, message: str = "", **properties: str) -> None:
    """Write a single workflow command line to stdout."""
    line = f"::{command}"
    if properties:
        props = ",".join(
            f"{key}={escape_property(str(value))}"
            for key, value in properties.items()
            if value
        )
        if props:
            line = f"{line} {props}"
    sys.stdout.write(f"{line}::{escape_data(message)}\n")
    sys.stdout.flush()


def notice(message: str, title: str = "") -> None:
    issue_command("notice", message, title=title)


def warning(message: str, title: str = "") -> None:
    issue_command("warning", message, title=title)


def error(message: str, title: str = "") -> None:
    issue_command("error", message, title=title)


@contextmanager
def group(name: str) -> Iterator[None]:
    """Fold everything logged inside the block under a collapsible header.

    The group is closed even when the block raises.
    """
    issue_command("group", name)
    try:
        yield
    finally:
        issue_command("endgroup")


def set_output(name: str, value: str, output_file: str = "") -> None:
    """Publish a step output for later steps (``steps.<id>.outputs.<name>``)."""
    if not output_file:
        issue_command("set-output", value, name=name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: value must not contain the delimiter {delimiter}")

    with Path(output_file).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
