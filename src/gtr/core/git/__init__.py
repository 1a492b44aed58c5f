"""Git operations subpackage.

This subpackage provides an abstraction over git operations with support for
testing via fakes.
"""

from gtr.core.git.abc import Git
from gtr.core.git.real import RealGit

__all__ = [
    "Git",
    "RealGit",
]
