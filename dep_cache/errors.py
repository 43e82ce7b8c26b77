"""Error types raised by the caching pipeline.

Core functions raise these and never exit the process; the CLI is the only
place that turns them into an exit status.
"""


class DepCacheError(Exception):
    """Base class for every failure the pipeline reports to the user."""


class UsageError(DepCacheError):
    pass


class ConfigError(DepCacheError):
    pass


class CacheRootError(DepCacheError):
    pass


class HashError(DepCacheError):
    pass


class OutputGuardError(DepCacheError):
    pass


class CacheProbeError(DepCacheError):
    pass


class InstallError(DepCacheError):
    pass


class GenerationError(DepCacheError):
    pass


class CacheArchiveError(DepCacheError):
    pass


__all__ = [
    "DepCacheError",
    "UsageError",
    "ConfigError",
    "CacheRootError",
    "HashError",
    "OutputGuardError",
    "CacheProbeError",
    "InstallError",
    "GenerationError",
    "CacheArchiveError",
]
