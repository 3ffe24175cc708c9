"""CLI command handlers."""

from .ask import cmd_ask
from .delete import cmd_delete
from .generate import cmd_generate
from .history import cmd_history
from .ingest import cmd_ingest
from .show import cmd_show
from .toggle import cmd_toggle

__all__ = [
    "cmd_ask",
    "cmd_delete",
    "cmd_generate",
    "cmd_history",
    "cmd_ingest",
    "cmd_show",
    "cmd_toggle",
]
