"""
ConfigCommand — View and set configuration

Usage:
    tfsnip config
    tfsnip config --set output.editor=sublime
    tfsnip config --set schema.reserved=tags,timeouts --user
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print


class ConfigCommand(BaseCommand):
    """Shows the merged configuration or writes one setting."""

    def show_config(self) -> int:
        safe_print(self.config_manager.display(), file=self.stdout)
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """
        Set a configuration value.

        Returns:
            Exit code (0 saved, 1 rejected)
        """
        error = self.config_manager.set(key, value, scope=scope)
        if error:
            self.reporter.fail(error)
            return 1

        target = (self.config_manager.user_config_path if scope == "user"
                  else self.config_manager.project_config_path)
        safe_print(f"{self.symbols.check_pass} Set {key} = {value} ({target})", file=self.stdout)
        return 0


# =============================================================================
# Registration
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., output.editor=sublime)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            cli.reporter.fail("Use format KEY=VALUE (e.g., output.editor=sublime)")
            return 1
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        return cli._config_cmd.set_config(key.strip(), value.strip(), scope)
    return cli._config_cmd.show_config()
