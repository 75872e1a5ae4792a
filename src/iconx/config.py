"""Runtime configuration for iconx.

Every setting can be overridden through an environment variable, and the CLI
options override the environment:

- ICONX_REPO_URL: Repository to clone (default: devicon on GitHub)
- ICONX_CLONE_DIR: Where the temporary clone is placed
- ICONX_ICONS_DIR: Icon root inside the clone
- ICONX_OUTPUT_DIR: Flat output directory for <tech>.svg files
- ICONX_MAX_WORKERS: Upper cap on parallel workers
- ICONX_LOG_LEVEL: Logging level (read by utils.setup_logging)
"""

import os
from dataclasses import dataclass, replace

from iconx.utils import get_int_env, get_str_env


DEFAULT_REPO_URL = 'https://github.com/devicons/devicon.git'
DEFAULT_CLONE_DIR = 'devicon-clone'
DEFAULT_ICONS_DIR = 'icons'
DEFAULT_OUTPUT_DIR = 'icons'

# Each job does filesystem I/O; more workers than this against one disk stops paying off
MAX_WORKERS_CAP = 8


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings shared by the pipeline steps."""

    repo_url: str = DEFAULT_REPO_URL
    clone_dir: str = DEFAULT_CLONE_DIR
    icons_dir: str = DEFAULT_ICONS_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    max_workers: int = MAX_WORKERS_CAP

    @classmethod
    def from_env(cls) -> 'ExtractorConfig':
        """Build a config from ICONX_* environment variables."""
        max_workers = get_int_env('ICONX_MAX_WORKERS')
        return cls(
            repo_url=get_str_env('ICONX_REPO_URL', DEFAULT_REPO_URL),
            clone_dir=get_str_env('ICONX_CLONE_DIR', DEFAULT_CLONE_DIR),
            icons_dir=get_str_env('ICONX_ICONS_DIR', DEFAULT_ICONS_DIR),
            output_dir=get_str_env('ICONX_OUTPUT_DIR', DEFAULT_OUTPUT_DIR),
            max_workers=max_workers if max_workers > 0 else MAX_WORKERS_CAP,
        )

    def with_overrides(self, **overrides) -> 'ExtractorConfig':
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def icons_path(self) -> str:
        """Icon root inside the clone."""
        return os.path.join(self.clone_dir, self.icons_dir)
