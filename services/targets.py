"""Upstream target handling for the YNAB API."""

from collections.abc import Iterable

from core.config import Config
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest


def build_target_url(base_url: str, budget_id: str, path: str, query: str) -> str:
    """Join base URL, budget id, inbound path and query.

    The path is appended exactly as received; no normalization is applied.
    """
    search = f"?{query}" if query else ""
    return f"{base_url}{budget_id}{path}{search}"


class YnabTarget:
    """YNAB-specific request preparation."""

    def __init__(self, config: Config, header_builder: HeaderBuilder) -> None:
        self._config = config
        self._headers = header_builder

    def prepare(
        self,
        method: str,
        path: str,
        query: str,
        headers: Iterable[tuple[str, str]],
        *,
        has_body: bool = False,
    ) -> PreparedRequest:
        """Prepare an inbound request for forwarding to YNAB."""
        ynab = self._config.ynab
        return PreparedRequest(
            method=method,
            url=build_target_url(ynab.base_url, ynab.budget_id, path, query),
            headers=self._headers.build_upstream_headers(headers, ynab.token),
            has_body=has_body,
        )
