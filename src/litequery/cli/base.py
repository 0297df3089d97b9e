from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any

import typer

_LOGGING_CONFIGURED = False


def configure_logging(level: int = logging.INFO) -> None:
    """Configure CLI-wide logging once; later calls are no-ops."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True


@contextmanager
def handle_errors(operation: str, *, logger: logging.Logger) -> Generator[None, None, None]:
    """Log any failure, print it in red and exit with code 1.

    User Output:
        - "✗ {operation} failed: {exc}" via typer.secho().
    """
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error during %s", operation)
        typer.secho(f"✗ {operation} failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(1) from exc


def format_result(result: dict[str, Any], *, operation: str) -> str:
    """Format a command result dict into CLI-friendly text.

    Args:
        result: Dict with optional keys: success, total, affected, items.
        operation: Operation name shown on the first line.
    """
    icon = "✓" if result.get("success", True) else "✗"
    lines = [f"{icon} {operation}"]

    stats = [
        f"{key}: {result[key]}"
        for key in ("total", "affected")
        if result.get(key) is not None
    ]
    if stats:
        lines.append("  " + " | ".join(stats))

    items = result.get("items") or []
    if items:
        lines.append("  Items:")
        for item in items:
            row = ", ".join(f"{key}={value!r}" for key, value in item.items())
            lines.append(f"    • {row}")

    return "\n".join(lines)


class BaseCLI:
    """Utility base class for CLI command groups."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self.logger = logging.getLogger(__name__)

    def handle_cli_operation(
        self,
        *,
        operation: str,
        op_callable: Callable[[], dict[str, Any]],
        pre_message: str | None = None,
    ) -> dict[str, Any]:
        """Run an operation with consistent logging, formatting, and errors.

        User Output:
            - Prints pre_message via typer.echo() if provided.
            - Prints formatted result via typer.echo().
        """
        if pre_message:
            typer.echo(pre_message)

        with handle_errors(operation, logger=self.logger):
            result = op_callable()

        typer.echo(format_result(result, operation=operation))
        return result
