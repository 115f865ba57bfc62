"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts and pipelines

Example:
    out = Output(console=console, json_mode=get_json_mode())
    out.success("Wrote settings", output_path="MigrationSettings.json")
    out.table("Plans", ["Plan", "Sites"], [["Migration_ASP_...", "8"]])
    raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.table import Table

from ..core.errors import (
    AlreadyExistsError,
    AuthenticationError,
    EmptyInputError,
    MigrationSettingsError,
    ParseError,
    ResourceLookupError,
    ResourceNotFoundError,
    SettingsWriteError,
    ValidationError,
)


class ExitCode:
    """Standardized exit codes for CLI commands.

    Scripts can check $? and know exactly what failed:
        0 = Success
        1 = Validation error (bad parameters, output already exists)
        2 = Package results file unreadable or malformed
        3 = No packaged sites to migrate
        4 = Required Azure resource not found
        5 = Azure resource lookup failed
        6 = Azure sign-in failed
        7 = Settings file could not be written
        10 = User cancelled
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    PARSE_ERROR = 2
    EMPTY_INPUT = 3
    RESOURCE_NOT_FOUND = 4
    RESOURCE_LOOKUP_ERROR = 5
    AUTHENTICATION_ERROR = 6
    WRITE_ERROR = 7
    USER_CANCELLED = 10


# Most specific first: ResourceNotFoundError before ResourceLookupError, etc.
_ERROR_EXIT_CODES: list[tuple[type[MigrationSettingsError], int]] = [
    (AlreadyExistsError, ExitCode.VALIDATION_ERROR),
    (ValidationError, ExitCode.VALIDATION_ERROR),
    (ParseError, ExitCode.PARSE_ERROR),
    (EmptyInputError, ExitCode.EMPTY_INPUT),
    (ResourceNotFoundError, ExitCode.RESOURCE_NOT_FOUND),
    (ResourceLookupError, ExitCode.RESOURCE_LOOKUP_ERROR),
    (AuthenticationError, ExitCode.AUTHENTICATION_ERROR),
    (SettingsWriteError, ExitCode.WRITE_ERROR),
]


def exit_code_for(error: MigrationSettingsError) -> int:
    """Map a pipeline error to its exit code."""
    for error_type, code in _ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.VALIDATION_ERROR


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str, *, suggestion: str | None = None) -> None:
        """Output a warning message."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def error(
        self,
        message: str,
        *,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if category:
                error_obj["category"] = category
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message)

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for i, col in enumerate(columns):
                justify = "right" if i == len(columns) - 1 else "left"
                table.add_column(col, justify=justify)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code
