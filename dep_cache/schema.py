from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime
from pathlib import Path


class Settings(BaseModel):
    """Per-run configuration handed to the pipeline."""
    model_config = ConfigDict(extra="forbid")

    cache_dir: Optional[Path] = None  # explicit override, beats CACHE_DIR
    symlink: bool = True  # install via symlink instead of a recursive copy
    force: bool = False  # remove a pre-existing output path first
    prefix: str = ""  # prepended to progress lines only


class Invocation(BaseModel):
    spec_file: Path
    output_dir: Path
    command: str
    args: List[str] = []


class RunOutcome(BaseModel):
    cache_key: str
    entry_path: Path
    output_path: Path
    cached: bool  # True when an existing entry was installed
    symlinked: bool
    elapsed_s: float


class EntryMeta(BaseModel):
    """Sidecar written next to a cache entry after it has been archived."""
    cache_key: str
    spec_file: str
    command: str
    args: List[str] = []
    created_at: datetime
    generation_s: float
