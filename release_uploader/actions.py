"""GitHub Actions workflow commands.

The runner reads step outputs from the file named by $GITHUB_OUTPUT and
parses `::command::message` lines written to stdout. Outside a runner
(no output file) outputs fall back to the legacy `::set-output` command
so they are still visible in the console.
"""

import sys
import uuid
from typing import TextIO


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommands:
    """Writes outputs and workflow commands for the current step."""

    def __init__(self, output_path: str = "", stream: TextIO | None = None):
        self.output_path = output_path
        self.stream = stream or sys.stdout
        self.failed = False

    def set_output(self, name: str, value: str) -> None:
        if not self.output_path:
            self._command("set-output", value, name=name)
            return

        if "\n" in value:
            # Multiline values use the heredoc form with a unique delimiter.
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{name}={value}\n"
        with open(self.output_path, "a", encoding="utf-8") as f:
            f.write(entry)

    def set_failed(self, message: str) -> None:
        """Report *message* as an error annotation and mark the step failed."""
        self.failed = True
        self._command("error", message)

    def debug(self, message: str) -> None:
        self._command("debug", message)

    def info(self, message: str) -> None:
        self.stream.write(f"{message}\n")

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def _command(self, command: str, message: str, **properties: str) -> None:
        props = ",".join(f"{k}={escape_data(v)}" for k, v in properties.items())
        head = f"{command} {props}" if props else command
        self.stream.write(f"::{head}::{escape_data(message)}\n")
        self.stream.flush()
