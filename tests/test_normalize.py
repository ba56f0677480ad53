from curl_restassured.parser.base import BasicAuth
from curl_restassured.parser.normalize import clean, coalesce, normalize


class TestCoalesce:
    def test_first_not_none(self):
        assert coalesce(None, 0, 5) == 0
        assert coalesce(None, None) is None


class TestClean:
    def test_drops_empty_values(self):
        tree = {"a": None, "b": "", "c": False, "d": [], "e": {}, "f": 0, "g": True}
        assert clean(tree) == {"f": 0, "g": True}

    def test_post_order_collapses_parents(self):
        tree = {"outer": {"inner": {"x": None, "y": [None, ""]}}, "keep": "v"}
        assert clean(tree) == {"keep": "v"}

    def test_everything_empty_becomes_none(self):
        assert clean({"a": {"b": []}}) is None
        assert clean([None, False]) is None

    def test_strips_quotes_from_keys(self):
        assert clean({'"name"': "x"}) == {"name": "x"}

    def test_idempotent(self):
        tree = {"a": {"b": {"c": None}, "d": [1, {}, "x"]}, "e": False}
        once = clean(tree)
        assert clean(once) == once

    def test_preserved_keys_are_untouched(self):
        tree = {"data": {"active": False, "tags": []}, "flags": {"k": False}}
        assert clean(tree, preserve=("data",)) == {"data": {"active": False, "tags": []}}

    def test_preserved_keys_drop_when_empty(self):
        tree = {"headers": {}, "data": None, "url": "http://a"}
        assert clean(tree, preserve=("data", "headers")) == {"url": "http://a"}

    def test_preserved_headers_keep_empty_values(self):
        tree = {"headers": {"X-Empty": ""}}
        assert clean(tree, preserve=("headers",)) == {"headers": {"X-Empty": ""}}


class TestNormalize:
    def test_url_decomposition(self):
        req = normalize({"url": "https://api.example.com/v1/users?page=2"})
        assert req.method == "GET"
        assert req.base_url == "https://api.example.com"
        assert req.endpoint == "/v1/users"
        assert req.query_params == {"page": "2"}
        assert req.path_template == "/v1/users"

    def test_explicit_fields_win_over_url(self):
        req = normalize({
            "url": "https://a.com/users/42?x=1",
            "query_params": {"y": "2"},
            "path_template": "/users/{id}",
            "path_parameters": ["id"],
        })
        assert req.query_params == {"y": "2"}
        assert req.path_template == "/users/{id}"
        assert req.path_parameters == ["id"]

    def test_malformed_url_uses_explicit_base_and_endpoint(self):
        req = normalize({"url": "{{host}}/users", "base_url": "{{host}}", "endpoint": "/users"})
        assert req.base_url == "{{host}}"
        assert req.endpoint == "/users"

    def test_flat_network_fields_win_over_grouped(self):
        req = normalize({
            "url": "http://a",
            "retry": 5,
            "network_config": {"retry": 1, "timeout": 30, "max_redirs": 2},
        })
        assert req.network_config.retry == 5
        assert req.network_config.timeout == 30
        assert req.network_config.max_redirects == 2

    def test_grouped_ssl_config(self):
        req = normalize({"url": "http://a", "cert": "c.pem", "ssl_config": {"cert": "other.pem", "capath": "/etc/ssl"}})
        assert req.ssl_config.cert == "c.pem"
        assert req.ssl_config.capath == "/etc/ssl"

    def test_empty_groups_are_pruned(self):
        req = normalize({"url": "http://a", "flags": {"compressed": False}, "headers": {}})
        assert req.network_config is None
        assert req.ssl_config is None
        assert req.flags == {}
        assert "flags" not in req.to_tree()
        assert "network_config" not in req.to_tree()

    def test_json_body_parsed_and_raw_kept(self):
        req = normalize({"url": "http://a", "data": '{"a": 1, "ok": false}'})
        assert req.data == {"a": 1, "ok": False}
        assert req.raw_data == '{"a": 1, "ok": false}'

    def test_non_json_body_kept_as_string(self):
        req = normalize({"url": "http://a", "data": "a=1&b=2"})
        assert req.data == "a=1&b=2"
        assert req.body_text == "a=1&b=2"

    def test_url_credentials_become_basic_auth(self):
        req = normalize({"url": "https://bob:pw@a.com/x"})
        assert req.auth == BasicAuth(username="bob", password="pw")

    def test_header_values_are_strings(self):
        req = normalize({"url": "http://a", "headers": {"X-Count": 3}})
        assert req.headers == {"X-Count": "3"}

    def test_all_options_alias(self):
        req = normalize({"url": "http://a", "all_options": ["--no-buffer"]})
        assert req.raw_options == ["--no-buffer"]

    def test_full_url_reconstruction(self):
        req = normalize({"url": "http://a.com:8080/p?x=1&y=2"})
        assert req.full_url == "http://a.com:8080/p?x=1&y=2"
