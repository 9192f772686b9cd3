"""Top-level package for sitecopy.

This package provides the localized document engine behind a multi-locale
site's admin editors: normalization into editing documents, sparse locale
overrides, merge-back on save, and dirty tracking. The main entry point is
`EditingSession`.
"""

from .session import EditingSession

__all__ = ["EditingSession", "__version__"]

__version__ = "0.1.0"
