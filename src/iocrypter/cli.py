"""Command line front ends: ``iocrypter-encrypt`` and ``iocrypter-decrypt``.

Both take exactly ``-i <input file> -o <output file> -p <password>`` and
report to the error stream.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.markup import escape

from iocrypter.errors import IOCrypterError
from iocrypter.stream import api

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
LOG_LEVEL_ENV = "IOCRYPTER_LOG_LEVEL"

console = Console(stderr=True, soft_wrap=True)


def _configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _usage(prog: str) -> str:
    return f"usage: {prog} -i <input file> -o <output file> -p <password>"


class _StrictCommand(click.Command):
    """Command whose usage errors print a one-line usage and exit 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError:
            console.print(escape(_usage(ctx.info_name or self.name or "iocrypter")))
            ctx.exit(EXIT_FAILURE)
            raise  # pragma: no cover - ctx.exit always raises


def _handle_action(action: Callable[[], None], verb: str) -> int:
    try:
        action()
    except IOCrypterError as exc:
        console.print(f"[red]failed to {verb} data:[/red] {escape(str(exc))}")
        return EXIT_FAILURE
    except FileNotFoundError as exc:
        console.print(f"[red]file not found:[/red] {escape(str(exc))}")
        return EXIT_FAILURE
    except OSError as exc:  # noqa: BLE001
        console.print(f"[red]filesystem error:[/red] {escape(str(exc))}")
        return EXIT_FAILURE
    return EXIT_SUCCESS


def _options(fn: Callable[..., None]) -> Callable[..., None]:
    fn = click.option("-p", "password", default=None)(fn)
    fn = click.option("-o", "output_path", default=None, type=click.Path(path_type=Path))(fn)
    fn = click.option("-i", "input_path", default=None, type=click.Path(path_type=Path))(fn)
    return fn


def _run(
    ctx: click.Context,
    input_path: Path | None,
    output_path: Path | None,
    password: str | None,
    *,
    verb: str,
    action: Callable[[Path, Path, str], None],
) -> None:
    if input_path is None or output_path is None or password is None:
        console.print(escape(_usage(ctx.info_name or "iocrypter")))
        ctx.exit(EXIT_FAILURE)
        return

    _configure_logging()
    started = time.perf_counter()
    code = _handle_action(lambda: action(input_path, output_path, password), verb)
    if code == EXIT_SUCCESS:
        elapsed = time.perf_counter() - started
        console.print(
            f"File {escape(str(input_path))} successfully {verb}ed to: "
            f"{escape(str(output_path))} (Time: {elapsed:.3f}s)"
        )
    ctx.exit(code)


@click.command(cls=_StrictCommand, context_settings={"help_option_names": []})
@_options
@click.pass_context
def encrypt_command(
    ctx: click.Context, input_path: Path | None, output_path: Path | None, password: str | None
) -> None:
    """Encrypt a file with a password."""

    _run(ctx, input_path, output_path, password, verb="encrypt", action=api.encrypt_file)


@click.command(cls=_StrictCommand, context_settings={"help_option_names": []})
@_options
@click.pass_context
def decrypt_command(
    ctx: click.Context, input_path: Path | None, output_path: Path | None, password: str | None
) -> None:
    """Authenticate and decrypt a file with a password."""

    _run(ctx, input_path, output_path, password, verb="decrypt", action=api.decrypt_file)


def _main(command: click.Command, prog_name: str, argv: list[str] | None) -> int:
    try:
        return command.main(args=argv, prog_name=prog_name, standalone_mode=False)
    except SystemExit as exc:  # noqa: TRY003
        return exc.code if isinstance(exc.code, int) else EXIT_FAILURE


def encrypt_main(argv: list[str] | None = None) -> int:
    return _main(encrypt_command, "iocrypter-encrypt", argv)


def decrypt_main(argv: list[str] | None = None) -> int:
    return _main(decrypt_command, "iocrypter-decrypt", argv)


__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "decrypt_command",
    "decrypt_main",
    "encrypt_command",
    "encrypt_main",
]
