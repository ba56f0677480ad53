"""curl flag interpretation.

Walks the token stream and maps recognised curl options onto the flat
request dict understood by :func:`curl_restassured.parser.normalize.normalize`.
Unknown options never abort parsing; they are kept in ``raw_options``.
"""

import logging
from urllib.parse import quote_plus

from curl_restassured.parser.base import ParserOptions
from curl_restassured.parser.tokenizer import unquote

logger = logging.getLogger(__name__)

# Options that consume the following token.
VALUE_FLAGS = {
    "-X": "method",
    "--request": "method",
    "--url": "url",
    "-H": "header",
    "--header": "header",
    "-d": "data",
    "--data": "data",
    "--data-raw": "data",
    "--data-ascii": "data",
    "--data-binary": "data",
    "--data-urlencode": "data_urlencode",
    "--json": "json",
    "-F": "form",
    "--form": "form",
    "--form-string": "form",
    "-u": "user",
    "--user": "user",
    "--oauth2-bearer": "bearer",
    "-b": "cookie",
    "--cookie": "cookie",
    "-A": "user_agent",
    "--user-agent": "user_agent",
    "-e": "referer",
    "--referer": "referer",
    "-x": "proxy",
    "--proxy": "proxy",
    "--connect-timeout": "connect_timeout",
    "-m": "max_time",
    "--max-time": "max_time",
    "--retry": "retry",
    "--retry-delay": "retry_delay",
    "--retry-max-time": "retry_max_time",
    "--max-redirs": "max_redirs",
    "-E": "cert",
    "--cert": "cert",
    "--key": "key",
    "--cacert": "cacert",
    "--capath": "capath",
}

BOOLEAN_FLAGS = {
    "--compressed": "compressed",
    "-k": "insecure",
    "--insecure": "insecure",
    "-L": "location",
    "--location": "location",
    "--http2": "http2",
    "--http1.1": "http1.1",
    "-s": "silent",
    "--silent": "silent",
    "-S": "show-error",
    "--show-error": "show-error",
    "-v": "verbose",
    "--verbose": "verbose",
    "-i": "include",
    "--include": "include",
    "-f": "fail",
    "--fail": "fail",
}

METHOD_FLAGS = {
    "-I": "HEAD",
    "--head": "HEAD",
    "-G": "GET",
    "--get": "GET",
}

SSL_VERSION_FLAGS = {
    "-1": "tlsv1",
    "--tlsv1": "tlsv1",
    "--tlsv1.0": "tlsv1.0",
    "--tlsv1.1": "tlsv1.1",
    "--tlsv1.2": "tlsv1.2",
    "--tlsv1.3": "tlsv1.3",
    "-2": "sslv2",
    "--sslv2": "sslv2",
    "-3": "sslv3",
    "--sslv3": "sslv3",
}

INT_FIELDS = {"retry", "max_redirs"}
FLOAT_FIELDS = {"connect_timeout", "max_time", "retry_delay", "retry_max_time"}
STRING_FIELDS = {"user_agent", "referer", "proxy", "cert", "key", "cacert", "capath"}


def _find_key(mapping: dict, name: str) -> str | None:
    lowered = name.lower()
    for key in mapping:
        if key.lower() == lowered:
            return key
    return None


class FlagInterpreter:
    """Maps a curl token stream onto a flat request dict."""

    def __init__(self, options: ParserOptions | None = None):
        self.options = options or ParserOptions()

    def interpret(self, tokens: list[str]) -> dict:
        raw: dict = {"headers": {}, "flags": {}, "raw_options": []}
        implied_method = None

        i = 0
        if tokens and unquote(tokens[0]).lower() in ("curl", "curl.exe"):
            i = 1

        while i < len(tokens):
            token = tokens[i]
            flag, attached = self._split_flag(token)

            if flag in VALUE_FLAGS:
                if attached is not None:
                    value = attached
                    i += 1
                elif i + 1 < len(tokens):
                    value = tokens[i + 1]
                    i += 2
                else:
                    logger.debug("Option %s has no argument, ignoring it", flag)
                    i += 1
                    continue
                self._apply(raw, VALUE_FLAGS[flag], unquote(value), flag)
                continue

            i += 1
            if flag in METHOD_FLAGS:
                implied_method = METHOD_FLAGS[flag]
            elif flag in BOOLEAN_FLAGS:
                raw["flags"][BOOLEAN_FLAGS[flag]] = True
            elif flag in SSL_VERSION_FLAGS:
                raw["ssl_version"] = SSL_VERSION_FLAGS[flag]
            elif self._expand_short_flags(raw, flag):
                if "G" in flag[1:]:
                    implied_method = "GET"
                elif "I" in flag[1:]:
                    implied_method = "HEAD"
            elif unquote(token).startswith("http"):
                if "url" not in raw:
                    raw["url"] = unquote(token)
                else:
                    self._keep_unknown(raw, unquote(token))
            else:
                logger.debug("Skipping unrecognised token %r", token)
                self._keep_unknown(raw, unquote(token))

        self._finish(raw, implied_method)
        return raw

    # -- token helpers --------------------------------------------------------

    def _split_flag(self, token: str) -> tuple[str, str | None]:
        """Split ``--name=value`` and ``-Xvalue`` into flag and attached value."""
        if token.startswith("--") and "=" in token:
            name, value = token.split("=", 1)
            if name in VALUE_FLAGS:
                return name, value
        elif token.startswith("-") and not token.startswith("--") and len(token) > 2:
            if token[:2] in VALUE_FLAGS:
                return token[:2], token[2:]
        return token, None

    def _expand_short_flags(self, raw: dict, token: str) -> bool:
        """Apply combined short booleans such as ``-sSL``."""
        if not token.startswith("-") or token.startswith("--") or len(token) < 3:
            return False
        letters = [f"-{c}" for c in token[1:]]
        if not all(f in BOOLEAN_FLAGS or f in METHOD_FLAGS for f in letters):
            return False
        for f in letters:
            if f in BOOLEAN_FLAGS:
                raw["flags"][BOOLEAN_FLAGS[f]] = True
        return True

    def _keep_unknown(self, raw: dict, token: str) -> None:
        if self.options.keep_unknown_options:
            raw["raw_options"].append(token)

    # -- field handlers -------------------------------------------------------

    def _apply(self, raw: dict, field: str, value: str, flag: str) -> None:
        if field == "method":
            if value:
                raw["method"] = value.upper()
        elif field == "url":
            raw.setdefault("url", value)
        elif field == "header":
            self._set_header(raw["headers"], value)
        elif field == "data":
            raw["data"] = value
        elif field == "data_urlencode":
            raw["data"] = self._urlencode_data(value)
        elif field == "json":
            raw["data"] = value
            for name in ("Content-Type", "Accept"):
                if _find_key(raw["headers"], name) is None:
                    raw["headers"][name] = "application/json"
        elif field == "form":
            key, _, form_value = value.partition("=")
            raw.setdefault("form_data", {})[key.strip()] = form_value
        elif field == "user":
            username, _, password = value.partition(":")
            raw["auth"] = {"type": "basic", "username": username, "password": password}
        elif field == "bearer":
            raw["auth"] = {"type": "bearer", "token": value}
        elif field == "cookie":
            self._set_cookies(raw, value, flag)
        elif field in INT_FIELDS or field in FLOAT_FIELDS:
            self._set_number(raw, field, value)
        elif field in STRING_FIELDS:
            raw[field] = value

    def _set_header(self, headers: dict, line: str) -> None:
        name, sep, value = line.partition(":")
        name = name.strip()
        if not sep:
            # curl sends "-H 'X-Empty;'" as an empty header
            name = name.rstrip(";")
        if not name:
            return

        existing = _find_key(headers, name)
        if existing is None:
            headers[name] = value.strip()
        elif self.options.duplicate_headers == "last":
            headers[existing] = value.strip()

    def _set_cookies(self, raw: dict, value: str, flag: str) -> None:
        if "=" not in value:
            # a cookie jar file, not inline cookies
            self._keep_unknown(raw, flag)
            self._keep_unknown(raw, value)
            return
        cookies = raw.setdefault("cookies", {})
        for pair in value.split(";"):
            key, sep, cookie_value = pair.partition("=")
            if sep and key.strip():
                cookies[key.strip()] = cookie_value.strip()

    def _set_number(self, raw: dict, field: str, value: str) -> None:
        try:
            raw[field] = int(value) if field in INT_FIELDS else float(value)
        except ValueError:
            logger.warning("Ignoring non-numeric value %r for %s", value, field)

    def _urlencode_data(self, value: str) -> str:
        name, sep, content = value.partition("=")
        if not sep:
            return quote_plus(value)
        return f"{name}={quote_plus(content)}"

    # -- post-processing ------------------------------------------------------

    def _finish(self, raw: dict, implied_method: str | None) -> None:
        if implied_method == "GET" and raw.get("data") and raw.get("url"):
            url = raw["url"]
            separator = "&" if "?" in url else "?"
            raw["url"] = f"{url}{separator}{raw.pop('data')}"

        if "method" not in raw:
            if implied_method:
                raw["method"] = implied_method
            elif raw.get("data") or raw.get("form_data"):
                raw["method"] = "POST"
            else:
                raw["method"] = "GET"
