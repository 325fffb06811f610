"""Pack command implementation"""

from pathlib import Path

import click

from ..utils.output import (
    console,
    format_pack_result,
    print_error,
    print_summary,
    render_pack_markdown,
)
from ...api import Packer
from ...api.exceptions import CmpkgToolError
from ...constants import EMOJI_PACKAGE, SUMMARY_CONSOLE, SUMMARY_FORMATS


@click.command()
@click.argument('folder', type=click.Path(path_type=Path))
@click.option(
    '--output', '-o',
    type=click.Path(path_type=Path),
    help='Output directory (default: the package folder)'
)
@click.option(
    '--version', 'version',
    help='Package version, overrides the manifest version'
)
@click.option(
    '--develop', is_flag=True,
    help='Mark the package as a development build'
)
@click.option(
    '--summary',
    type=click.Choice(SUMMARY_FORMATS),
    default=SUMMARY_CONSOLE,
    show_default=True,
    help='Summary format'
)
@click.pass_context
def pack(ctx, folder, output, version, develop, summary):
    """Package FOLDER into a .cmpkg archive

    Reads manifesto.server (or manifesto.local), resolves it against the
    files of the folder, writes manifesto.dat and zips the result.

    Examples:

        cmpkg-tool pack ./release

        cmpkg-tool pack ./release -o ./dist --version 2.1.0 --develop
    """
    console.print(f"{EMOJI_PACKAGE} Packaging {folder}...")

    try:
        result = Packer().pack(folder, output, version=version, develop=develop)
    except CmpkgToolError as e:
        print_error("Packaging failed", e)
        if ctx.obj.debug:
            console.print_exception()
        ctx.exit(1)

    print_summary(summary, result, format_pack_result, render_pack_markdown)
