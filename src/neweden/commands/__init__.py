"""
neweden Commands

Command implementations for the CLI.
Each module handles a logical group of related commands.
"""

from . import navigation, universe

__all__ = [
    "navigation",
    "universe",
]
