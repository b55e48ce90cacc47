"""depmeta-cli: Command-line interface for dependency metadata records."""

from __future__ import annotations

__version__ = "0.1.0"
