# cmpkg_tool/cli/main.py
"""Main CLI entry point for cmpkg-tool"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..models import ToolConfig
from ..services.config_service import ConfigService
from .utils.output import console

# Import all commands
from .commands import (
    pack,
    pack_scripts,
    deploy,
    notify,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy configuration loading"""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False
        self._config: Optional[ToolConfig] = None

    @property
    def config(self) -> ToolConfig:
        """Get tool configuration (lazy loading)

        Raises:
            ConfigError: If the configuration file is invalid
        """
        if self._config is None:
            self._config = ConfigService().load(self.config_path)
        return self._config


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all log output')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--config', 'config_path', type=click.Path(path_type=Path),
              help='Configuration file (default: .cmpkg-tool.yaml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, no_color, config_path):
    """cmpkg-tool - Package and deploy .cmpkg release archives

    Packages release folders from their manifest (manifesto.server or
    manifesto.local), uploads the archives to S3 and notifies the
    marketplace.
    """
    if no_color:
        console.no_color = True

    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        logging.disable(logging.NOTSET)
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context(config_path)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(pack.pack)
cli.add_command(pack_scripts.pack_scripts)
cli.add_command(deploy.deploy)
cli.add_command(notify.notify)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
