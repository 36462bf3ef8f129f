"""Executable lookup abstraction.

Resolving a command name against the search path is the only environment
access the process pool performs. Hiding it behind an ABC lets tests
describe which tools are "installed" without touching PATH.
"""

from abc import ABC, abstractmethod


class Executables(ABC):
    """Abstract interface for locating executables."""

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Locate an executable.

        Args:
            name: Bare command name (looked up on PATH) or path to a file

        Returns:
            Path of the executable, or None if it cannot be found
        """
        ...
