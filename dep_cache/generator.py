"""Install-or-generate pipeline for cached output directories."""
from __future__ import annotations

import os
import shutil
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from . import cache
from .errors import CacheArchiveError, GenerationError, InstallError, OutputGuardError
from .runner import CommandRunner, SubprocessRunner, format_command
from .schema import EntryMeta, Invocation, RunOutcome, Settings
from .utils import hash_file, progress, warn

PathLike = Union[str, Path]


def _remove_path(path: Path) -> None:
    # Symlinks are removed themselves, never followed.
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except FileNotFoundError:
        return


def prepare_output(output_dir: PathLike, force: bool) -> None:
    """Make sure nothing sits at ``output_dir`` before installing or generating.

    With ``force`` any existing file, directory or symlink is removed; a path
    that does not exist counts as success. Without ``force`` an existing path
    is an error so unrelated user data is never overwritten.
    """
    path = Path(output_dir)
    if force:
        try:
            _remove_path(path)
        except OSError as e:
            raise OutputGuardError(f"Error trying to remove existing output dir {path}: {e}") from e
        return
    if os.path.lexists(path):
        raise OutputGuardError(f"output path '{path}' already exists - maybe rerun with `-f`")


def copy_tree(src: PathLike, dst: PathLike) -> None:
    """Recursive copy of ``src`` to a new ``dst``; symlinks inside are kept as links."""
    shutil.copytree(src, dst, symlinks=True)


def install(entry: PathLike, output_dir: PathLike, symlink: bool = True) -> None:
    """Materialise a cache entry at ``output_dir``, as a symlink or as a copy."""
    try:
        src = os.path.abspath(entry)
        dst = os.path.abspath(output_dir)
    except (OSError, ValueError) as e:
        raise InstallError(f"Cannot resolve install paths: {e}") from e
    try:
        if symlink:
            os.symlink(src, dst, target_is_directory=True)
        else:
            copy_tree(src, dst)
    except (OSError, shutil.Error) as e:
        raise InstallError(f"Failed installing {src} to {dst}: {e}") from e


def generate_and_cache(
    entry: PathLike,
    output_dir: PathLike,
    command: str,
    args: Sequence[str],
    runner: CommandRunner,
) -> None:
    """Run the generating command, then archive its output as ``entry``.

    Nothing is archived when the command fails to start or exits non-zero.
    """
    code = runner.run(command, list(args))
    if code != 0:
        raise GenerationError(f"`{format_command(command, args)}` exited with status {code}")
    try:
        copy_tree(output_dir, entry)
    except (OSError, shutil.Error) as e:
        raise CacheArchiveError(f"Failed caching {output_dir} into {entry}: {e}") from e


def execute(
    settings: Settings,
    invocation: Invocation,
    runner: Optional[CommandRunner] = None,
) -> RunOutcome:
    """Run one full cache lookup for ``invocation``.

    Returns a ``RunOutcome`` describing which path was taken; raises a
    ``DepCacheError`` subclass on the first failure.
    """
    runner = runner or SubprocessRunner()
    prefix = settings.prefix
    cache_root = cache.resolve_cache_root(settings.cache_dir, prefix=prefix)
    key = hash_file(invocation.spec_file)
    entry = cache.entry_path(cache_root, key)

    prepare_output(invocation.output_dir, settings.force)
    cached = cache.is_cached(entry)

    start = time.time()
    if cached:
        progress("Found cached dependencies - installing those", prefix)
        try:
            meta = cache.read_meta(entry)
        except (OSError, ValueError) as e:
            warn(f"ignoring unreadable cache metadata for {entry}: {e}", prefix)
            meta = None
        if meta is not None:
            progress(
                f"Cached output was built by `{format_command(meta.command, meta.args)}` at {meta.created_at:%Y-%m-%d %H:%M:%S}",
                prefix,
            )
        install(entry, invocation.output_dir, settings.symlink)
    else:
        progress(
            f"Running `{format_command(invocation.command, invocation.args)}` and caching the output",
            prefix,
        )
        generate_and_cache(entry, invocation.output_dir, invocation.command, invocation.args, runner)
        built = EntryMeta(
            cache_key=key,
            spec_file=os.path.abspath(invocation.spec_file),
            command=invocation.command,
            args=list(invocation.args),
            created_at=datetime.now(timezone.utc),
            generation_s=time.time() - start,
        )
        try:
            cache.write_meta(entry, built)
        except OSError as e:
            warn(f"could not write cache metadata for {entry}: {e}", prefix)
    elapsed = time.time() - start
    progress(f"Succeeded in {elapsed:.2f} sec", prefix)

    return RunOutcome(
        cache_key=key,
        entry_path=entry,
        output_path=Path(os.path.abspath(invocation.output_dir)),
        cached=cached,
        symlinked=cached and settings.symlink,
        elapsed_s=elapsed,
    )


__all__ = [
    "prepare_output",
    "copy_tree",
    "install",
    "generate_and_cache",
    "execute",
]
