"""
cdeploy - UI Components
Standardized command headers
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

BRAND = "cdeploy"


def show_header(
    title: str,
    env: Optional[str] = None,
    app: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Build Image", "Deploy Stack")
        env: Target environment (if applicable)
        app: App name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Build Image",
            env="dev",
            app="api",
            details={"Region": "us-east-1"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{BRAND}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if env:
        console.print(f"{prefix} Environment: [cyan]{escape(env)}[/cyan]")
    if app:
        console.print(f"{prefix} App: [cyan]{escape(app)}[/cyan]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{escape(str(value))}[/cyan]")

    console.print()
