"""Top‑level package for pr-backport.

This package cherry-picks commits from a repository's primary branch onto
one or more release branches and opens a pull request for each of them.
See `README.md` for more information.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
