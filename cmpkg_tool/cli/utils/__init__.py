"""CLI utility functions"""

from .output import (
    console,
    format_pack_result,
    format_scripts_result,
    format_deploy_result,
    format_notify_result,
    render_pack_markdown,
    render_scripts_markdown,
    render_deploy_markdown,
    print_summary,
    print_error,
    print_warning,
)

__all__ = [
    'console',
    'format_pack_result',
    'format_scripts_result',
    'format_deploy_result',
    'format_notify_result',
    'render_pack_markdown',
    'render_scripts_markdown',
    'render_deploy_markdown',
    'print_summary',
    'print_error',
    'print_warning',
]
