# cmpkg_tool/cli/commands/__init__.py
"""CLI commands"""

from . import pack
from . import pack_scripts
from . import deploy
from . import notify

__all__ = [
    "pack",
    "pack_scripts",
    "deploy",
    "notify",
]
