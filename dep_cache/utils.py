"""Miscellaneous utility helpers: content hashing and progress output."""
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union

import typer

from .errors import HashError

CHUNK_SIZE = 64 * 1024


def hash_file(path: Union[str, Path]) -> str:
    """Return the lowercase hex SHA-1 digest of a file's contents.

    The file is streamed in ``CHUNK_SIZE`` blocks so large spec files are
    never held in memory.
    """
    h = hashlib.sha1()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                h.update(chunk)
    except OSError as e:
        raise HashError(f"Can't hash dependency description: {e}") from e
    return h.hexdigest()


def progress(message: str, prefix: str = "") -> None:
    typer.echo(f"{prefix}{message}", err=True)


def warn(message: str, prefix: str = "") -> None:
    progress(f"Warning: {message}", prefix)


__all__ = ["hash_file", "progress", "warn", "CHUNK_SIZE"]
