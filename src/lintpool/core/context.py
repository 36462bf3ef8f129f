"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from lintpool.core.config import CONFIG_FILENAME, LintpoolConfig, load_config
from lintpool.core.executables import Executables, RealExecutables
from lintpool.core.process import ConcurrentProcess, default_parallelism


@dataclass(frozen=True)
class LintpoolContext:
    """Immutable context holding all dependencies for lintpool commands.

    Created at CLI entry point and threaded through the application.
    Tests construct it directly to inject fakes.
    """

    config: LintpoolConfig
    executables: Executables
    cwd: Path

    @property
    def config_path(self) -> Path:
        return self.cwd / CONFIG_FILENAME

    def new_process(self, jobs: int | None = None) -> ConcurrentProcess:
        """Create a process pool honoring --jobs, then config, then CPU count."""
        parallelism = jobs or self.config.parallelism or default_parallelism()
        return ConcurrentProcess(parallelism, executables=self.executables)


def create_context(cwd: Path | None = None) -> LintpoolContext:
    """Create the production context, loading `.lintpool.toml` from cwd."""
    resolved_cwd = cwd if cwd is not None else Path.cwd()
    return LintpoolContext(
        config=load_config(resolved_cwd / CONFIG_FILENAME),
        executables=RealExecutables(),
        cwd=resolved_cwd,
    )
