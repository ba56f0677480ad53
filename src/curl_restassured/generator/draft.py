"""Editable view of a request, as the generator consumes it.

Headers, auth and query parameters are ordered entry lists so the editor
can switch single entries off without deleting them.
"""

from typing import Any, Literal

from pydantic import BaseModel

from curl_restassured.parser.base import BasicAuth, BearerAuth, CanonicalRequest


class Entry(BaseModel):
    key: str
    value: str = ""
    enabled: bool = True

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.key) and bool(self.value)


class AuthEntry(Entry):
    type: Literal["header", "basic", "bearer"] = "header"

    @property
    def active(self) -> bool:
        if self.type == "basic":
            return self.enabled and bool(self.key)
        return super().active


class RequestDraft(BaseModel):
    method: str = "GET"
    url: str = ""
    base_url: str = ""
    endpoint: str = "/"
    headers: list[Entry] = []
    auth: list[AuthEntry] = []
    query_params: list[Entry] = []
    body: Any = None
    form_data: list[Entry] = []
    cookies: list[Entry] = []
    proxy: str | None = None
    insecure: bool = False
    follow_redirects: bool = False
    max_redirects: int | None = None

    @classmethod
    def from_request(cls, request: CanonicalRequest) -> "RequestDraft":
        """Build a draft with every entry enabled.

        Authorization headers move into the auth list; user agent and
        referer become headers unless already set explicitly.
        """
        headers: list[Entry] = []
        auth: list[AuthEntry] = []
        for key, value in request.headers.items():
            if key.lower() == "authorization":
                auth.append(AuthEntry(key=key, value=value))
            else:
                headers.append(Entry(key=key, value=value))

        names = {key.lower() for key in request.headers}
        if request.user_agent and "user-agent" not in names:
            headers.append(Entry(key="User-Agent", value=request.user_agent))
        if request.referer and "referer" not in names:
            headers.append(Entry(key="Referer", value=request.referer))

        if isinstance(request.auth, BasicAuth):
            auth.append(AuthEntry(key=request.auth.username, value=request.auth.password, type="basic"))
        elif isinstance(request.auth, BearerAuth):
            auth.append(AuthEntry(key="Authorization", value=f"Bearer {request.auth.token}", type="bearer"))

        network = request.network_config
        return cls(
            method=request.method,
            url=request.url,
            base_url=request.base_url,
            endpoint=request.endpoint,
            headers=headers,
            auth=auth,
            query_params=[Entry(key=k, value=v) for k, v in request.query_params.items()],
            body=request.body_text,
            form_data=[Entry(key=k, value=v) for k, v in request.form_data.items()],
            cookies=[Entry(key=k, value=v) for k, v in request.cookies.items()],
            proxy=request.proxy,
            insecure=request.has_flag("insecure"),
            follow_redirects=request.has_flag("location"),
            max_redirects=network.max_redirects if network else None,
        )

    @property
    def request_url(self) -> str:
        """URL for the verb call, without its query string."""
        if self.base_url:
            return f"{self.base_url}{self.endpoint}"
        return self.url.split("?", 1)[0]
