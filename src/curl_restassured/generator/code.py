"""REST-assured code generator: renders a request draft as a TestNG test."""

import json
from urllib.parse import urlsplit

from curl_restassured.generator.config import GenerationConfig
from curl_restassured.generator.draft import AuthEntry, RequestDraft

VERBS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}

BODY_INDENT = " " * 8
STAGE_INDENT = " " * 12
CALL_INDENT = " " * 16


def java_string(value: str) -> str:
    """Quote ``value`` as a Java string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


class RestAssuredGenerator:
    """Generates a REST-assured test class or a pasteable test method."""

    def __init__(self, config: GenerationConfig):
        self.config = config

    def generate(self, draft: RequestDraft) -> str:
        if self.config.option == "full":
            return self._render_class(draft)
        return self._render_snippet(draft)

    # -- file layout ----------------------------------------------------------

    def _render_class(self, draft: RequestDraft) -> str:
        with_setup = bool(draft.base_url)
        lines = self._render_imports(full=True, with_setup=with_setup)
        lines += ["", f"public class {self.config.service_name.strip()} {{", ""]

        if with_setup:
            lines += [
                "    @BeforeClass",
                "    public void setup() {",
                f"        RestAssured.baseURI = {java_string(draft.base_url)};",
                "    }",
                "",
            ]

        lines += self._render_test_method(draft, target=draft.endpoint if with_setup else draft.request_url)

        if self.config.include_retry:
            lines += [""] + self._render_retry_analyzer()

        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_snippet(self, draft: RequestDraft) -> str:
        lines = self._render_imports(full=False, with_setup=False)
        lines.append("")
        lines += self._render_test_method(draft, target=draft.request_url)
        return "\n".join(lines) + "\n"

    def _render_imports(self, full: bool, with_setup: bool) -> list[str]:
        lines = []
        if full:
            if with_setup:
                lines.append("import io.restassured.RestAssured;")
            if not self.config.use_fluent_api:
                lines.append("import io.restassured.response.Response;")
            if self.config.include_retry:
                lines.append("import org.testng.IRetryAnalyzer;")
                lines.append("import org.testng.ITestResult;")
            if with_setup:
                lines.append("import org.testng.annotations.BeforeClass;")
            lines.append("import org.testng.annotations.Test;")
            lines.append("")

        lines.append("import static io.restassured.RestAssured.given;")
        if self.config.assert_response_time:
            lines.append("import static org.hamcrest.Matchers.lessThan;")
        return lines

    def _render_retry_analyzer(self) -> list[str]:
        return [
            "    public static class RetryAnalyzer implements IRetryAnalyzer {",
            f"        private static final int MAX_RETRIES = {self.config.max_retries};",
            "        private int attempts = 0;",
            "",
            "        @Override",
            "        public boolean retry(ITestResult result) {",
            "            if (attempts < MAX_RETRIES) {",
            "                attempts++;",
            "                return true;",
            "            }",
            "            return false;",
            "        }",
            "    }",
        ]

    # -- test method ----------------------------------------------------------

    def _test_annotation(self) -> str:
        attrs = []
        groups = [g for g in self.config.test_groups if g.strip()]
        if groups:
            attrs.append("groups = {" + ", ".join(java_string(g) for g in groups) + "}")
        if self.config.test_priority is not None:
            attrs.append(f"priority = {self.config.test_priority}")
        if self.config.test_description.strip():
            attrs.append(f"description = {java_string(self.config.test_description)}")
        # the analyzer class is only emitted inside a full test class
        if self.config.include_retry and self.config.option == "full":
            attrs.append("retryAnalyzer = RetryAnalyzer.class")
        return f"@Test({', '.join(attrs)})" if attrs else "@Test"

    def _render_test_method(self, draft: RequestDraft, target: str) -> list[str]:
        lines = [
            f"    {self._test_annotation()}",
            f"    public void {self.config.method_name.strip()}() {{",
        ]
        given = self._given_calls(draft)
        verb = self._verb_call(draft.method, target)
        then = self._then_calls()

        if self.config.use_fluent_api:
            chain = [f"{BODY_INDENT}given()"] + given + [f"{STAGE_INDENT}.when()", verb]
            if then:
                chain += [f"{STAGE_INDENT}.then()"] + then
            chain[-1] += ";"
            lines += chain
        else:
            chain = [f"{BODY_INDENT}Response response = given()"] + given + [f"{STAGE_INDENT}.when()", verb]
            chain[-1] += ";"
            lines += chain
            if then:
                then_chain = ["", f"{BODY_INDENT}response.then()"] + then
                then_chain[-1] += ";"
                lines += then_chain

        lines.append("    }")
        return lines

    # Order is fixed so regenerated code diffs cleanly:
    # headers, auth, query params, body, then cookies/form/transport options.
    def _given_calls(self, draft: RequestDraft) -> list[str]:
        calls = []
        for header in draft.headers:
            if header.active:
                calls.append(f".header({java_string(header.key)}, {java_string(header.value)})")

        for entry in draft.auth:
            if entry.active:
                calls.append(self._auth_call(entry))

        for param in draft.query_params:
            if param.active:
                calls.append(f".queryParam({java_string(param.key)}, {java_string(param.value)})")

        body = self._body_text(draft.body)
        if body and body.strip():
            calls.append(f".body({java_string(body)})")

        for cookie in draft.cookies:
            if cookie.active:
                calls.append(f".cookie({java_string(cookie.key)}, {java_string(cookie.value)})")

        for field in draft.form_data:
            if not (field.enabled and field.key):
                continue
            if field.value.startswith("@"):
                path = field.value[1:].split(";", 1)[0]
                calls.append(f".multiPart({java_string(field.key)}, new java.io.File({java_string(path)}))")
            else:
                calls.append(f".formParam({java_string(field.key)}, {java_string(field.value)})")

        if draft.insecure:
            calls.append(".relaxedHTTPSValidation()")
        if draft.proxy:
            calls.append(self._proxy_call(draft.proxy))
        if draft.follow_redirects:
            calls.append(".redirects().follow(true)")
        if draft.max_redirects is not None:
            calls.append(f".redirects().max({draft.max_redirects})")

        return [f"{CALL_INDENT}{call}" for call in calls]

    def _auth_call(self, entry: AuthEntry) -> str:
        if entry.key.lower() == "authorization" and entry.value.startswith("Bearer "):
            token = entry.value[len("Bearer "):]
            return f".auth().oauth2({java_string(token)})"
        if entry.type == "basic":
            return f".auth().preemptive().basic({java_string(entry.key)}, {java_string(entry.value)})"
        return f".header({java_string(entry.key)}, {java_string(entry.value)})"

    def _body_text(self, body) -> str | None:
        if body is None:
            return None
        if isinstance(body, str):
            return body
        return json.dumps(body, separators=(",", ":"))

    def _proxy_call(self, proxy: str) -> str:
        parts = urlsplit(proxy if "://" in proxy else f"http://{proxy}")
        try:
            port = parts.port
        except ValueError:
            port = None
        if not parts.hostname:
            return f".proxy({java_string(proxy)})"
        if port is None:
            return f".proxy({java_string(parts.hostname)})"
        return f".proxy({java_string(parts.hostname)}, {port})"

    def _verb_call(self, method: str, target: str) -> str:
        method = method.upper()
        if method in VERBS:
            return f"{CALL_INDENT}.{method.lower()}({java_string(target)})"
        return f"{CALL_INDENT}.request({java_string(method)}, {java_string(target)})"

    def _then_calls(self) -> list[str]:
        calls = []
        if self.config.assertion_required:
            calls.append(f".statusCode({int(self.config.status_code.strip())})")
        if self.config.assert_response_time:
            calls.append(f".time(lessThan({self.config.max_response_time_ms}L))")
        if self.config.logging_required:
            calls.append(".log().all()")
        return [f"{CALL_INDENT}{call}" for call in calls]
