from pathlib import Path
from unittest.mock import patch

from curl_restassured.generator.config import GenerationConfig, PomConfig, PomProjectInfo
from curl_restassured.generator.draft import RequestDraft
from curl_restassured.generator.service import generate
from curl_restassured.parser.curl import parse_curl

FIXTURES = Path(__file__).parent / "fixtures"


def _request(name: str = "create_user.curl"):
    return parse_curl((FIXTURES / name).read_text()).request


class TestGenerate:
    def test_full_class(self):
        result = generate(_request(), GenerationConfig(option="full", service_name="UserService"))
        assert result.success
        assert "public class UserService {" in result.test_code
        assert result.pojo_code is None
        assert result.pom_xml is None
        assert result.errors == {}

    def test_with_pojo_and_pom(self):
        config = GenerationConfig(option="full", need_pojo=True, generate_pom=True)
        result = generate(_request(), config)
        assert result.success
        assert list(result.pojo_classes) == ["RequestBody", "Address"]
        assert result.pojo_code.startswith("// RequestBody.java\n")
        assert "<artifactId>lombok</artifactId>" in result.pom_xml

    def test_dict_config_with_camel_case_keys(self):
        result = generate(_request(), {"option": "method", "methodName": "createsUser", "statusCode": 201})
        assert result.success
        assert "public void createsUser() {" in result.test_code
        assert ".statusCode(201)" in result.test_code

    def test_dict_request_tree(self):
        tree = _request().to_tree()
        result = generate(tree, GenerationConfig(option="method"))
        assert result.success
        assert '.auth().oauth2("tok123")' in result.test_code

    def test_draft_input(self):
        draft = RequestDraft(base_url="http://a", endpoint="/ping")
        result = generate(draft, GenerationConfig(option="full"))
        assert '.get("/ping")' in result.test_code

    def test_non_object_body_skips_pojo(self):
        request = parse_curl("curl -d a=1 http://a").request
        result = generate(request, GenerationConfig(option="full", need_pojo=True))
        assert result.success
        assert result.pojo_classes == {}
        assert result.pojo_code is None


class TestGenerateFailures:
    def test_blank_service_name(self):
        result = generate(_request(), GenerationConfig(option="full", service_name=""))
        assert not result.success
        assert result.error == "Service name is required for full test class generation"
        assert result.test_code is None

    def test_missing_option(self):
        result = generate(_request(), GenerationConfig())
        assert result.error == "Please select a code generation option"

    def test_full_pom_without_artifact_id(self):
        config = GenerationConfig(
            option="full",
            generate_pom=True,
            pom_config=PomConfig(project_info=PomProjectInfo(artifact_id="")),
        )
        result = generate(_request(), config)
        assert not result.success
        assert "pom_config.project_info.artifact_id" in result.errors
        assert result.pom_xml is None
        assert result.test_code is None

    def test_invalid_dict_config(self):
        result = generate(_request(), {"option": "everything"})
        assert not result.success
        assert "config.option" in result.errors

    def test_request_without_url(self):
        result = generate(RequestDraft(), GenerationConfig(option="full"))
        assert result.errors == {"url": "URL is required in parsed data"}

    def test_invalid_request_tree(self):
        result = generate({"url": "http://a", "headers": "nope"}, GenerationConfig(option="full"))
        assert not result.success
        assert "request.headers" in result.errors

    def test_rendering_errors_are_reported(self):
        with patch("curl_restassured.generator.service.RestAssuredGenerator.generate", side_effect=RuntimeError("boom")):
            result = generate(_request(), GenerationConfig(option="full"))
        assert not result.success
        assert result.errors == {"_generate": "Code generation failed: boom"}
