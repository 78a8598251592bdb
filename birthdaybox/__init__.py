"""birthdaybox: a password-gated birthday greeting app.

Draw a random quote from one of six categories and keep a history of
every draw on disk.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
