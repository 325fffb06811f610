"""Notify command implementation"""

from pathlib import Path

import click

from ..utils.output import console, format_notify_result, print_error
from ...api import Deployer
from ...api.exceptions import CmpkgToolError
from ...constants import DEFAULT_ENVIRONMENT, VALID_ENVIRONMENTS


@click.command()
@click.argument('folder', type=click.Path(path_type=Path))
@click.option(
    '--environment', '-e',
    default=DEFAULT_ENVIRONMENT,
    show_default=True,
    help=f"Target environment ({', '.join(VALID_ENVIRONMENTS)})"
)
@click.option('--marketplace-url', help='Marketplace base URL override')
@click.pass_context
def notify(ctx, folder, environment, marketplace_url):
    """Notify the marketplace with the manifesto.dat of FOLDER

    Examples:

        cmpkg-tool notify ./release -e producao
    """
    try:
        result = Deployer(ctx.obj.config).notify(folder, environment, marketplace_url)
    except CmpkgToolError as e:
        print_error("Notify failed", e)
        if ctx.obj.debug:
            console.print_exception()
        ctx.exit(1)

    format_notify_result(result)
    if not result.success:
        ctx.exit(1)
