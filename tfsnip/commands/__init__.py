"""
Commands — Modular CLI command implementations with self-registration

Each command module:
1. Defines XxxCommand class (handler implementation)
2. Exports register_parser(subparsers) to configure its argparse
3. Exports handle(cli, args) returning the process exit code

Add a command = add its module to COMMAND_MODULES.
"""

import importlib
from typing import Dict, Callable, Any

from .base import BaseCommand

# Order determines help display order
COMMAND_MODULES = [
    'generate_cmd',
    'inspect_cmd',
    'config_cmd',
]

# Handler registry: command_name -> handle function
_handlers: Dict[str, Callable] = {}


def register_all(subparsers) -> None:
    """
    Register every command parser and its handler.

    Args:
        subparsers: argparse subparsers object from main parser
    """
    _handlers.clear()

    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)
        module.register_parser(subparsers)

        # 'generate_cmd' -> 'generate' unless the module says otherwise
        cmd_name = getattr(module, 'COMMAND_NAME', module_name.replace('_cmd', ''))
        _handlers[cmd_name] = module.handle


def dispatch(command: str, cli: Any, args: Any) -> int:
    """
    Dispatch command to its registered handler.

    Returns:
        Exit code from the handler

    Raises:
        KeyError: If command not registered
    """
    if command not in _handlers:
        raise KeyError(f"Unknown command: {command}. Available: {list(_handlers.keys())}")

    return _handlers[command](cli, args)


def get_registered_commands() -> list:
    """Get list of registered command names."""
    return list(_handlers.keys())


__all__ = ['BaseCommand', 'register_all', 'dispatch', 'get_registered_commands']
