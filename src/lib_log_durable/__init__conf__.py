"""Static package metadata surfaced by the CLI."""

from __future__ import annotations

from typing import Callable

name = "lib_log_durable"
title = "Buffered logging that survives rollbacks: immediate or deferred commits to a durable sink"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_durable"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_durable"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner line by line using ``writer`` (default print)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer or (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["print_info"]
