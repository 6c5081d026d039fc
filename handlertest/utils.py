from __future__ import annotations

from urllib.parse import SplitResult, urljoin, urlsplit

from .errors import InvalidURLError


def parse_url(url: str) -> tuple[SplitResult, str, int, str]:
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError as exc:
        raise InvalidURLError(f"Invalid URL {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(f"Only http and https schemes are supported: {url!r}")
    host = parsed.hostname or ""
    if not host:
        raise InvalidURLError(f"URL has no host: {url!r}")
    port = port or (443 if parsed.scheme == "https" else 80)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return parsed, host, port, path


def resolve_url(base_url: str, url: str) -> str:
    """Join a relative path onto ``base_url``; absolute URLs pass through."""
    if urlsplit(url).scheme:
        return url
    return urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))


def host_header(host: str, port: int, scheme: str) -> str:
    default_port = 443 if scheme == "https" else 80
    if ":" in host:
        host = f"[{host}]"
    return host if port == default_port else f"{host}:{port}"
