"""Pack-scripts command implementation"""

from pathlib import Path

import click

from ..utils.output import (
    console,
    format_scripts_result,
    print_error,
    print_summary,
    render_scripts_markdown,
)
from ...api import Packer
from ...api.exceptions import CmpkgToolError
from ...constants import SUMMARY_CONSOLE, SUMMARY_FORMATS


@click.command(name='pack-scripts')
@click.argument('folder', type=click.Path(path_type=Path))
@click.option(
    '--output', '-o',
    type=click.Path(path_type=Path),
    help='Output directory (default: the scripts folder)'
)
@click.option(
    '--standardize-names', is_flag=True,
    help='Rename _scriptsNN*.zip to scriptsNN*.zip'
)
@click.option(
    '--summary',
    type=click.Choice(SUMMARY_FORMATS),
    default=SUMMARY_CONSOLE,
    show_default=True,
    help='Summary format'
)
@click.pass_context
def pack_scripts(ctx, folder, output, standardize_names, summary):
    """Package database scripts of FOLDER

    A folder with config.json becomes _scripts.zip. Otherwise every
    subfolder named NN[suffix] with a config.json becomes
    _scriptsNN[suffix].zip holding its *.sql and *.migration files.

    Examples:

        cmpkg-tool pack-scripts ./database -o ./release

        cmpkg-tool pack-scripts ./database --standardize-names
    """
    try:
        result = Packer().pack_scripts(folder, output, standardize_names=standardize_names)
    except CmpkgToolError as e:
        print_error("Scripts packaging failed", e)
        if ctx.obj.debug:
            console.print_exception()
        ctx.exit(1)

    print_summary(summary, result, format_scripts_result, render_scripts_markdown)
