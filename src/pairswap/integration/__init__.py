"""
Imperative shell around the pool engine: asset custody, configuration and
signed administrative commands.
"""

from .admin_commands import AdminCommand, AdminCommandProcessor, parse_admin_command, sign_admin_command
from .config import load_config, load_yaml_config
from .transfers import InMemoryAsset

__all__ = [
    "AdminCommand",
    "AdminCommandProcessor",
    "parse_admin_command",
    "sign_admin_command",
    "load_config",
    "load_yaml_config",
    "InMemoryAsset",
]
