"""Header construction for upstream requests and relayed responses."""

from collections.abc import Iterable

# Owned by each connection, never copied across the proxy hop
HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


class HeaderBuilder:
    """Build upstream request headers and relayed response headers."""

    def build_upstream_headers(
        self,
        headers: Iterable[tuple[str, str]],
        token: str,
    ) -> list[tuple[str, str]]:
        """Copy inbound headers and set Authorization to the YNAB bearer token."""
        upstream: list[tuple[str, str]] = []
        for key, value in headers:
            key_lower = key.lower()
            if key_lower in HOP_BY_HOP or key_lower in ("host", "authorization"):
                continue
            upstream.append((key, value))
        upstream.append(("Authorization", f"Bearer {token}"))
        return upstream

    def build_response_headers(
        self, headers: Iterable[tuple[str, str]]
    ) -> list[tuple[str, str]]:
        """Pass through upstream response headers minus hop-by-hop ones."""
        return [(key, value) for key, value in headers if key.lower() not in HOP_BY_HOP]
