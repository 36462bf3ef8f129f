"""Real executable lookup using shutil.which()."""

import shutil

from lintpool.core.executables.abc import Executables


class RealExecutables(Executables):
    """Production implementation that consults the PATH environment variable."""

    def which(self, name: str) -> str | None:
        """Locate an executable with shutil.which()."""
        return shutil.which(name)
