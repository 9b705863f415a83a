"""Generate project files from template folders using case variants of a name."""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
