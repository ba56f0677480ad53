"""Canonical request models produced by the cURL parser.

The tokenizer, flag interpreter and URL decomposer all feed into
these models; the code generator and the projection utility consume them.
"""

import json
from typing import Annotated, Any, Literal, Union
from urllib.parse import urlencode

from pydantic import BaseModel, Field


class NoAuth(BaseModel):
    type: Literal["none"] = "none"


class BasicAuth(BaseModel):
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class BearerAuth(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str = ""


Auth = Annotated[Union[NoAuth, BasicAuth, BearerAuth], Field(discriminator="type")]


class NetworkConfig(BaseModel):
    """Timing, retry and redirect limits (seconds / counts)."""

    timeout: float | None = None
    connect_timeout: float | None = None
    max_time: float | None = None
    retry: int | None = None
    retry_delay: float | None = None
    retry_max_time: float | None = None
    max_redirects: int | None = None


class SslConfig(BaseModel):
    cert: str | None = None
    key: str | None = None
    cacert: str | None = None
    capath: str | None = None
    ssl_version: str | None = None


class CanonicalRequest(BaseModel):
    """A single HTTP request, normalized and free of curl flags."""

    method: str = "GET"
    url: str = ""
    base_url: str = ""
    endpoint: str = "/"
    path_template: str | None = None
    path_parameters: list[str] = []
    query_params: dict[str, str] = {}
    headers: dict[str, str] = {}
    data: Any = None  # parsed JSON value, or the raw string when not JSON
    raw_data: str | None = None
    form_data: dict[str, str] = {}
    cookies: dict[str, str] = {}
    auth: Auth | None = None
    proxy: str | None = None
    user_agent: str | None = None
    referer: str | None = None
    flags: dict[str, bool] = {}
    network_config: NetworkConfig | None = None
    ssl_config: SslConfig | None = None
    raw_options: list[str] = []

    @property
    def full_url(self) -> str:
        """Rebuild the request URL from base_url, endpoint and query_params."""
        url = f"{self.base_url}{self.endpoint}" if self.base_url else self.url
        if self.base_url and self.query_params:
            url += "?" + urlencode(self.query_params)
        return url

    @property
    def body_text(self) -> str | None:
        """Body as it should be sent on the wire."""
        if self.raw_data is not None:
            return self.raw_data
        if self.data is None:
            return None
        if isinstance(self.data, str):
            return self.data
        return json.dumps(self.data, separators=(",", ":"))

    def has_flag(self, name: str) -> bool:
        return self.flags.get(name) is True

    def to_tree(self) -> dict:
        """Plain-dict form with every empty branch pruned."""
        from curl_restassured.parser.normalize import VERBATIM_FIELDS, clean

        return clean(self.model_dump(), preserve=VERBATIM_FIELDS) or {}

    @classmethod
    def from_tree(cls, tree: dict) -> "CanonicalRequest":
        return cls.model_validate(tree)


class ParserOptions(BaseModel):
    """Policy switches for behaviour that curl itself leaves open."""

    duplicate_headers: Literal["last", "first"] = "last"
    strict_quotes: bool = False
    keep_unknown_options: bool = True


class ParseResult(BaseModel):
    success: bool
    request: CanonicalRequest | None = None
    error: str | None = None
