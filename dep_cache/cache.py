"""Cache root resolution and cache entry bookkeeping.

Entries live directly under the cache root, one directory per cache key:

    <root>/<sha1 of spec file>/            copy of the generated output
    <root>/<sha1 of spec file>.meta.json   how that copy was produced
"""
from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Mapping, Optional, Union

import orjson

from .errors import CacheProbeError, CacheRootError
from .schema import EntryMeta
from .utils import progress

CACHE_DIR_ENV = "CACHE_DIR"
DEFAULT_DIR_NAME = ".dep-cache"
DIR_MODE = 0o750


def ensure_dir(path: Path, prefix: str = "") -> None:
	"""Create ``path`` if missing; fail if something other than a directory is there."""
	try:
		path.stat()
	except FileNotFoundError:
		progress(f"creating cache dir {path}", prefix)
		try:
			path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
		except OSError as e:
			raise CacheRootError(f"Cache dir problems: {e}") from e
		return
	except OSError as e:
		raise CacheRootError(f"Cache dir problems: {e}") from e
	if not path.is_dir():
		raise CacheRootError(f"Cache dir problems: {path} exists but is not a dir")


def resolve_cache_root(
	explicit: Optional[Union[str, Path]] = None,
	environ: Optional[Mapping[str, str]] = None,
	prefix: str = "",
) -> Path:
	"""Return the absolute cache root, creating it on demand.

	Order: ``explicit`` -> ``$CACHE_DIR`` -> ``~/.dep-cache``.
	"""
	env = os.environ if environ is None else environ
	root = str(explicit) if explicit else env.get(CACHE_DIR_ENV, "")
	if not root:
		try:
			home = Path.home()
		except (RuntimeError, KeyError) as e:
			raise CacheRootError(f"Cache dir problems: cannot determine home directory: {e}") from e
		root = str(home / DEFAULT_DIR_NAME)
	path = Path(os.path.abspath(os.path.expanduser(root)))
	ensure_dir(path, prefix)
	return path


def entry_path(cache_root: Path, cache_key: str) -> Path:
	return cache_root / cache_key


def meta_path(entry: Path) -> Path:
	return entry.with_name(entry.name + ".meta.json")


def is_cached(entry: Path) -> bool:
	"""True when ``entry`` is an existing directory; missing means a cache miss."""
	try:
		entry.stat()
	except FileNotFoundError:
		return False
	except OSError as e:
		raise CacheProbeError(f"Error looking up cache dir {entry}: {e}") from e
	return entry.is_dir()


def write_meta(entry: Path, meta: EntryMeta) -> Path:
	"""Write the metadata sidecar for ``entry``. OSErrors propagate to the caller."""
	target = meta_path(entry)
	target.write_bytes(orjson.dumps(meta.model_dump(mode="json"), option=orjson.OPT_INDENT_2))
	return target


def read_meta(entry: Path) -> Optional[EntryMeta]:
	target = meta_path(entry)
	if not target.exists():
		return None
	return EntryMeta.model_validate(orjson.loads(target.read_bytes()))


def wipe(cache_root: Path) -> None:
	"""Remove the whole cache root. A root that is already gone is fine."""
	try:
		shutil.rmtree(cache_root)
	except FileNotFoundError:
		return
	except OSError as e:
		raise CacheRootError(f"Failed wiping cache {cache_root}: {e}") from e


__all__ = [
	"CACHE_DIR_ENV",
	"DEFAULT_DIR_NAME",
	"ensure_dir",
	"resolve_cache_root",
	"entry_path",
	"meta_path",
	"is_cached",
	"write_meta",
	"read_meta",
	"wipe",
]
