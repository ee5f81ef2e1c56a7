"""Translate domain and infrastructure errors into CLI failures."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from orderdesk.domain.exceptions import DomainException, ErrorKind, InfrastructureError

EXIT_CODES = {
    ErrorKind.VALIDATION: 2,
    ErrorKind.NOT_FOUND: 3,
    ErrorKind.CONFLICT: 4,
}
INFRASTRUCTURE_EXIT_CODE = 5


class CommandFailed(click.ClickException):

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@contextmanager
def reported_errors() -> Iterator[None]:
    try:
        yield
    except DomainException as exc:
        raise CommandFailed(f"[{exc.kind.value}] {exc}", EXIT_CODES[exc.kind]) from exc
    except InfrastructureError as exc:
        raise CommandFailed(f"[infrastructure] {exc}", INFRASTRUCTURE_EXIT_CODE) from exc
