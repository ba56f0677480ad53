"""URL decomposition into base URL, endpoint and query parameters."""

import logging
import re
from urllib.parse import parse_qsl, unquote, urlsplit

from pydantic import BaseModel

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"^(?:\{(\w+)\}|:(\w+))$")


class UrlParts(BaseModel):
    base_url: str
    endpoint: str = "/"
    query_params: dict[str, str] = {}
    username: str | None = None
    password: str | None = None
    valid: bool = True


def decompose_url(url: str) -> UrlParts:
    """Split ``url`` into scheme://host[:port], path and query mapping.

    Malformed URLs degrade to an opaque base URL with endpoint ``/``.
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError:
        logger.debug("Cannot parse URL %r, treating it as opaque", url)
        return UrlParts(base_url=url, valid=False)

    if not parts.scheme or not parts.hostname:
        logger.debug("URL %r has no scheme or host, treating it as opaque", url)
        return UrlParts(base_url=url, valid=False)

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None:
        host = f"{host}:{port}"

    query_params: dict[str, str] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        query_params[key] = value

    return UrlParts(
        base_url=f"{parts.scheme}://{host}",
        endpoint=parts.path or "/",
        query_params=query_params,
        username=unquote(parts.username) if parts.username else None,
        password=unquote(parts.password) if parts.password is not None else None,
    )


def extract_path_parameters(path: str) -> tuple[str, list[str]]:
    """Find ``{name}`` and ``:name`` segments in a path.

    Returns the path rewritten with ``{name}`` placeholders and the
    placeholder names in order of appearance.
    """
    names: list[str] = []
    segments = []
    for segment in path.split("/"):
        match = PLACEHOLDER_RE.match(segment)
        if match:
            name = match.group(1) or match.group(2)
            names.append(name)
            segments.append(f"{{{name}}}")
        else:
            segments.append(segment)
    return "/".join(segments), names
