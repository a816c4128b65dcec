"""command-refgen - code metrics and command reference generator for Python projects."""

__version__ = "0.3.0"
__build__ = "12"

from .core.exceptions import CommandRefGenError

__all__ = ["CommandRefGenError", "__version__", "__build__"]
