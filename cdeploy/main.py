#!/usr/bin/env python3
"""cdeploy CLI - Main entry point"""

import functools
import os
import sys

import rich_click as click
from click.exceptions import Abort, ClickException, UsageError
from rich.markup import escape

from cdeploy import __version__
from cdeploy.commands import build, deploy
from cdeploy.exceptions import CDeployError
from cdeploy.logger import error_console

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"


def handle_cli_errors(func):
    """Decorator mapping every failure to exit code 1 with the error on stderr."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            error_console.print(f"\n[bold red]✗ Error:[/bold red] {escape(e.format_message())}\n")
            command = e.ctx.command.name if e.ctx and e.ctx.command else None
            if command and command != "cli":
                error_console.print(
                    f"[dim]Run[/dim] [cyan]cdeploy {command} --help[/cyan] [dim]for usage information[/dim]\n"
                )
            else:
                error_console.print(
                    "[dim]Run[/dim] [cyan]cdeploy --help[/cyan] [dim]for available commands[/dim]\n"
                )
            sys.exit(1)
        except ClickException as e:
            e.show()
            sys.exit(1)
        except CDeployError as e:
            error_console.print(f"\n[bold red]✗ Error:[/bold red] {escape(e.message)}")
            if e.context:
                error_console.print(f"  [dim]{escape(e.context)}[/dim]")
            error_console.print()
            sys.exit(1)
        except (KeyboardInterrupt, Abort):
            error_console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            error_console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {escape(str(e))}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                error_console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """
    cdeploy - Build, push and deploy apps to AWS from CI.

    \b
    Commands:
      cdeploy build  --env dev --region us-east-1 --account 123 \\
                     --dockerfile_path Dockerfile --app_name api --build_dir .
      cdeploy deploy --env dev --region us-east-1 --account 123 \\
                     --app_name api --stack_dir .aws
    """


cli.add_command(build.build)
cli.add_command(deploy.deploy)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli.main(prog_name="cdeploy", standalone_mode=False)


if __name__ == "__main__":
    main()
