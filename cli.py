"""CLI entry point for ynab-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import BUDGET_ID_ENV, CONFIG_FILE, TOKEN_ENV, Config, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, mask, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            print_config_status(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    # Missing credentials fail each request with a 500, not the server
    if not config.ynab.is_configured:
        console.print(f"[yellow]Warning:[/yellow] {TOKEN_ENV} or {BUDGET_ID_ENV} not configured")
        console.print(f"[dim]Set them in the environment or in {CONFIG_FILE}[/dim]")

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def print_config_status(config: Config) -> bool:
    """Print whether the YNAB credentials are present."""
    ynab = config.ynab
    if ynab.token:
        console.print(f"[green]{TOKEN_ENV}[/green] {mask(ynab.token)}")
    else:
        console.print(f"[yellow]{TOKEN_ENV}[/yellow] not set")
    if ynab.budget_id:
        console.print(f"[green]{BUDGET_ID_ENV}[/green] {ynab.budget_id}")
    else:
        console.print(f"[yellow]{BUDGET_ID_ENV}[/yellow] not set")
    console.print(f"[dim]Upstream:[/dim] {ynab.base_url}{ynab.budget_id or '{budget_id}'}")
    return ynab.is_configured


def _print_help():
    """Print help message."""
    help_text = f"""
[bold cyan]YNAB Proxy[/bold cyan]

Forwards requests to the YNAB budgets API with your token and CORS headers.

[bold]Usage:[/bold]
    ynab-proxy              Start with live dashboard
    ynab-proxy --check      Check YNAB credentials
    ynab-proxy --config     Show config locations
    ynab-proxy --help       Show this help

[bold]Configuration:[/bold]
    {TOKEN_ENV} and {BUDGET_ID_ENV} environment variables override
    ynab.token and ynab.budget_id in {CONFIG_FILE}.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
