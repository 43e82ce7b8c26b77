"""dep_cache

Caches a generated output directory (``node_modules``, ``vendor``, ...) keyed
by the content hash of the dependency specification file that produced it.

Primary entrypoints:
 - cli.py (Typer CLI)
 - generator.py (install-or-generate pipeline)
 - cache.py (cache root resolution, probing, wiping)
 - runner.py (external command invocation)
"""

__all__ = [
    "cache",
    "generator",
    "runner",
]
