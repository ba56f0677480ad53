import copy

from curl_restassured.parser.base import BasicAuth
from curl_restassured.parser.curl import parse_curl
from curl_restassured.projection import exclusions, filter_tree, project


def _request():
    return parse_curl(
        'curl -X POST http://a.com/users?page=1 -H "Accept: json" -H "X-Trace: 1" '
        """--retry 2 -d '{"name": "Ada", "tags": ["a", "b", "c"]}'"""
    ).request


class TestFilterTree:
    def test_missing_paths_are_kept(self):
        tree = {"a": 1, "b": {"c": 2}}
        assert filter_tree(tree, {}) == tree

    def test_drops_false_paths(self):
        tree = {"a": 1, "b": {"c": 2, "d": 3}}
        assert filter_tree(tree, {"b.c": False}) == {"a": 1, "b": {"d": 3}}

    def test_true_entries_are_no_ops(self):
        tree = {"a": 1}
        assert filter_tree(tree, {"a": True}) == {"a": 1}

    def test_list_items_by_index(self):
        tree = {"items": ["x", "y", "z"]}
        assert filter_tree(tree, {"items.1": False}) == {"items": ["x", "z"]}

    def test_dropping_parent_drops_children(self):
        tree = {"a": {"b": {"c": 1}}, "d": 2}
        assert filter_tree(tree, {"a": False, "a.b.c": True}) == {"d": 2}

    def test_input_is_not_mutated(self):
        tree = {"a": {"b": [1, {"c": 2}]}}
        snapshot = copy.deepcopy(tree)
        result = filter_tree(tree, {"a.b.0": False})
        assert tree == snapshot
        result["a"]["b"][0]["c"] = 99
        assert tree == snapshot


class TestProject:
    def test_empty_map_is_identity(self):
        req = _request()
        assert project(req, {}) == req

    def test_drop_header(self):
        req = project(_request(), exclusions(["headers.X-Trace"]))
        assert req.headers == {"Accept": "json"}

    def test_drop_group_field(self):
        req = project(_request(), {"network_config.retry": False})
        assert req.network_config.retry is None

    def test_drop_body_list_item(self):
        req = project(_request(), {"data.tags.1": False})
        assert req.data["tags"] == ["a", "c"]

    def test_drop_query_params(self):
        req = project(_request(), exclusions(["query_params"]))
        assert req.query_params == {}
        assert req.base_url == "http://a.com"

    def test_dict_input_stays_dict(self):
        result = project({"headers": {"A": "1", "B": "2"}}, {"headers.A": False})
        assert result == {"headers": {"B": "2"}}

    def test_original_model_untouched(self):
        req = _request()
        project(req, exclusions(["headers", "data"]))
        assert req.headers == {"Accept": "json", "X-Trace": "1"}
        assert req.data["name"] == "Ada"


class TestExclusions:
    def test_builds_false_map(self):
        assert exclusions(("a", "b.c")) == {"a": False, "b.c": False}


class TestProjectIncompleteGroups:
    def test_dropping_auth_type_drops_auth(self):
        req = parse_curl("curl -u admin:secret http://a.com/u").request
        projected = project(req, {"auth.type": False})
        assert projected.auth is None
        assert projected.base_url == "http://a.com"

    def test_dropping_auth_field_keeps_rest_of_auth(self):
        req = parse_curl("curl -u admin:secret http://a.com/u").request
        projected = project(req, {"auth.password": False})
        assert projected.auth == BasicAuth(username="admin")
