"""Protocol command types and their line parser."""

from .models import Append, Command, Delete, Print, Undo, command_name
from .parser import parse_command, parse_count

__all__ = [
    "Append",
    "Delete",
    "Print",
    "Undo",
    "Command",
    "command_name",
    "parse_command",
    "parse_count",
]
