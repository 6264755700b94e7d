# bucketsync Output Module
# Rich console tables

from bucketsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
