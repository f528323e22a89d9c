"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, method: str, path: str, status: int, outcome: str, timestamp: datetime):
        self.method = method
        self.path = path[:60] + "..." if len(path) > 60 else path
        self.status = status
        self.outcome = outcome
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent proxied requests and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._request_count = {"forwarded": 0, "preflight": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(
        self,
        method: str,
        path: str,
        status: int,
        *,
        outcome: str,
    ) -> None:
        """Log a preflight or forwarded request."""
        with self._lock:
            self._request_count[outcome] = self._request_count.get(outcome, 0) + 1
            info = RequestInfo(method, path, status, outcome, datetime.now())
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]
            self._refresh()
            write_cli_log(outcome.upper(), f"{method} {path}", status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._request_count["errors"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("YNAB Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._request_count['forwarded']}", style="green")
        stats.append("  |  ")
        stats.append(f"Preflight: {self._request_count['preflight']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Errors: {self._request_count['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Path", ratio=3)
            table.add_column("Status", width=6)

            for info in self._recent:
                style = "red" if info.status >= 400 else "green"
                if info.outcome == "preflight":
                    style = "blue"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    info.path,
                    Text(str(info.status), style=style),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[green]Recent Requests[/green]", border_style="green")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        elif not self.config.ynab.is_configured:
            content = Text(
                "YNAB_TOKEN or YNAB_BUDGET_ID not set - requests will get 500",
                style="yellow",
            )
        else:
            content = Text(
                f"Point your app at http://{self.config.proxy.host}:{self.config.proxy.port}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
