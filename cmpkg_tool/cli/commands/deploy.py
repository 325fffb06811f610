"""Deploy command implementation"""

import asyncio
import logging
import signal
from pathlib import Path

import click

from ..utils.output import (
    console,
    format_deploy_result,
    print_error,
    print_summary,
    print_warning,
    render_deploy_markdown,
)
from ...api import Deployer
from ...api.exceptions import CmpkgToolError
from ...constants import (
    DEFAULT_ENVIRONMENT,
    EMOJI_ROCKET,
    SUMMARY_CONSOLE,
    SUMMARY_FORMATS,
    VALID_ENVIRONMENTS,
)
from ...utils.async_utils import run_async

logger = logging.getLogger(__name__)


async def run_deploy(deployer: Deployer, folder: Path, environment: str, **options):
    """Run a deploy, cancelling between units on Ctrl+C"""
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
        handler_installed = True
    except (NotImplementedError, RuntimeError, ValueError):
        logger.debug("Signal handlers not supported here, Ctrl+C aborts immediately")
        handler_installed = False

    try:
        return await deployer.deploy_async(folder, environment, cancel_event=cancel_event, **options)
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


@click.command()
@click.argument('folder', type=click.Path(path_type=Path))
@click.option(
    '--environment', '-e',
    default=DEFAULT_ENVIRONMENT,
    show_default=True,
    help=f"Target environment ({', '.join(VALID_ENVIRONMENTS)})"
)
@click.option('--marketplace-url', help='Marketplace base URL override')
@click.option('--simulate', is_flag=True, help='Compute results without uploading')
@click.option('--force', is_flag=True, help='Upload even if the archive already exists')
@click.option('--access-key', help='AWS access key (default: AWS_ACCESS_KEY_ID)')
@click.option('--secret-key', help='AWS secret key (default: AWS_SECRET_ACCESS_KEY)')
@click.option('--region', help='AWS region (default: AWS_REGION or us-east-1)')
@click.option(
    '--summary',
    type=click.Choice(SUMMARY_FORMATS),
    default=SUMMARY_CONSOLE,
    show_default=True,
    help='Summary format'
)
@click.pass_context
def deploy(ctx, folder, environment, marketplace_url, simulate, force,
           access_key, secret_key, region, summary):
    """Deploy the packages of FOLDER to S3

    Every *.dat descriptor in the folder is paired with its .cmpkg archive,
    uploaded under packages/, packages-dev/ or packages-stage/ and
    announced to the marketplace. Failed packages are reported in the
    summary and do not change the exit code.

    Examples:

        cmpkg-tool deploy ./dist -e producao

        cmpkg-tool deploy ./dist -e stage --simulate --summary markdown
    """
    console.print(f"{EMOJI_ROCKET} Deploying {folder} to {environment}...")

    try:
        deployer = Deployer(ctx.obj.config)
        run = run_async(run_deploy(
            deployer,
            folder,
            environment,
            marketplace_url=marketplace_url,
            simulated=simulate,
            force=force,
            access_key=access_key,
            secret_key=secret_key,
            region=region,
        ))
    except CmpkgToolError as e:
        print_error("Deploy failed", e)
        if ctx.obj.debug:
            console.print_exception()
        ctx.exit(1)

    print_summary(summary, run, format_deploy_result, render_deploy_markdown)

    if run.cancelled:
        print_warning("Deploy cancelled, results are partial")
