"""nbgrep - grep for Jupyter notebooks.

Search cell sources and text outputs without wading through embedded image data.
"""

__version__ = "0.1.0"


class NbgrepError(Exception):
    """Base exception for all nbgrep errors."""

    pass


class NotebookParseError(NbgrepError):
    """Raised when a notebook is malformed or uses an unsupported format."""

    pass


class NotebookIOError(NbgrepError):
    """Raised when a notebook file cannot be read."""

    pass


class PatternError(NbgrepError):
    """Raised when the search pattern is not a valid regular expression."""

    pass


class ConfigurationError(NbgrepError):
    """Raised when configuration is invalid."""

    pass
