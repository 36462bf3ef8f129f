"""Fake implementation of Executables for testing.

Lets tests decide which tools are "installed" without depending on what
happens to be on the PATH of the machine running the suite.
"""

from lintpool.core.executables import Executables


class FakeExecutables(Executables):
    """In-memory fake executable lookup.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Lookups are recorded for test assertions

    Examples:
        >>> executables = FakeExecutables(installed={"shellcheck": "/usr/bin/shellcheck"})
        >>> executables.which("shellcheck")
        '/usr/bin/shellcheck'
        >>> executables.which("pyflakes") is None
        True
    """

    def __init__(self, *, installed: dict[str, str] | None = None) -> None:
        """Initialize fake with a mapping of tool name to executable path."""
        self._installed = installed or {}
        self._lookups: list[str] = []

    @property
    def lookups(self) -> list[str]:
        """Names passed to which(), in call order.

        This property is for test assertions only.
        """
        return list(self._lookups)

    def which(self, name: str) -> str | None:
        """Return the configured path for name, or None."""
        self._lookups.append(name)
        return self._installed.get(name)
