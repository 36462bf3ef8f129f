from lintpool.core.executables.abc import Executables
from lintpool.core.executables.real import RealExecutables

__all__ = [
    "Executables",
    "RealExecutables",
]
