"""Merge parser output into a CanonicalRequest and prune empty branches."""

import json
from typing import Any

from curl_restassured.parser.base import CanonicalRequest
from curl_restassured.parser.url import decompose_url, extract_path_parameters

# canonical field -> flat spellings accepted at the top level, in precedence order
NETWORK_FIELDS = {
    "timeout": ("timeout",),
    "connect_timeout": ("connect_timeout",),
    "max_time": ("max_time",),
    "retry": ("retry",),
    "retry_delay": ("retry_delay",),
    "retry_max_time": ("retry_max_time",),
    "max_redirects": ("max_redirects", "max_redirs"),
}

# user data whose contents are never pruned ("X-Empty;" sends an empty header)
VERBATIM_FIELDS = ("data", "headers")

SSL_FIELDS = {
    "cert": ("cert",),
    "key": ("key",),
    "cacert": ("cacert",),
    "capath": ("capath",),
    "ssl_version": ("ssl_version",),
}


def coalesce(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _is_empty(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (dict, list)) and not value:
        return True
    return False


def clean(value: Any, preserve: tuple[str, ...] = ()) -> Any:
    """Recursively drop None, empty strings, False and empty containers.

    Children are cleaned before their parent is judged, so a dict or list
    left with nothing in it collapses to None as well. Keys named in
    ``preserve`` (top level only) keep their contents untouched; they are
    dropped only when None, an empty string or an empty container.
    """
    if isinstance(value, list):
        items = [clean(item) for item in value]
        items = [item for item in items if not _is_empty(item)]
        return items or None

    if isinstance(value, dict):
        cleaned = {}
        for key, item in value.items():
            if key in preserve:
                if item is False or not _is_empty(item):
                    cleaned[key] = item
                continue
            item = clean(item)
            if not _is_empty(item):
                cleaned[str(key).strip('"')] = item
        return cleaned or None

    if value is False:
        return None
    return value


def _merge_group(raw: dict, group_key: str, fields: dict[str, tuple[str, ...]]) -> dict:
    group = raw.get(group_key) or {}
    merged = {}
    for name, flat_keys in fields.items():
        flat = coalesce(*(raw.get(k) for k in flat_keys))
        merged[name] = coalesce(flat, group.get(name), group.get(flat_keys[-1]))
    return merged


def _str_map(mapping: dict | None) -> dict[str, str]:
    if not mapping:
        return {}
    return {str(k): "" if v is None else str(v) for k, v in mapping.items()}


def _split_body(raw: dict) -> tuple[Any, str | None]:
    data = raw.get("data")
    raw_data = raw.get("raw_data")
    if data is None or data == "":
        data = raw_data
    if isinstance(data, str):
        raw_data = coalesce(raw_data, data)
        try:
            return json.loads(data), raw_data
        except ValueError:
            return data, raw_data
    return data, raw_data


def normalize(raw: dict) -> CanonicalRequest:
    """Build a CanonicalRequest from a flat or grouped raw request dict.

    Explicitly supplied fields win over values recomputed from the URL, and
    flat network/SSL fields win over the grouped ``network_config`` and
    ``ssl_config`` sub-objects.
    """
    url = raw.get("url") or raw.get("full_url") or ""
    parts = decompose_url(url)

    if parts.valid:
        base_url = parts.base_url
        endpoint = parts.endpoint
    else:
        base_url = raw.get("base_url") or ""
        endpoint = raw.get("endpoint") or "/"

    template, path_parameters = extract_path_parameters(endpoint)
    data, raw_data = _split_body(raw)

    auth = raw.get("auth")
    if not auth and parts.username:
        auth = {"type": "basic", "username": parts.username, "password": parts.password or ""}

    normalized = {
        "method": (raw.get("method") or "GET").upper(),
        "url": url,
        "base_url": base_url,
        "endpoint": endpoint,
        "path_template": raw.get("path_template") or template,
        "path_parameters": raw.get("path_parameters") or path_parameters,
        "query_params": _str_map(raw.get("query_params") or parts.query_params),
        "headers": _str_map(raw.get("headers")),
        "data": data,
        "raw_data": raw_data,
        "form_data": _str_map(raw.get("form_data")),
        "cookies": _str_map(raw.get("cookies")),
        "auth": auth,
        "proxy": raw.get("proxy"),
        "user_agent": raw.get("user_agent"),
        "referer": raw.get("referer"),
        "flags": raw.get("flags") or {},
        "network_config": _merge_group(raw, "network_config", NETWORK_FIELDS),
        "ssl_config": _merge_group(raw, "ssl_config", SSL_FIELDS),
        "raw_options": raw.get("raw_options") or raw.get("all_options") or [],
    }
    return CanonicalRequest.model_validate(clean(normalized, preserve=VERBATIM_FIELDS) or {})
