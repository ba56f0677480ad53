import json
from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from curl_restassured.cli import main
from curl_restassured.generator.config import GenerationResult

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliParse:
    def test_parse_to_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", str(FIXTURES / "list_pets.curl")])

        assert result.exit_code == 0
        tree = json.loads(result.output)
        assert tree["method"] == "GET"
        assert tree["base_url"] == "https://pets.example.com:8443"
        assert tree["network_config"] == {"retry": 3, "max_redirects": 5}

    def test_parse_to_yaml_with_exclude(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "parse", str(FIXTURES / "create_user.curl"),
            "--format", "yaml",
            "--exclude", "headers.Authorization",
        ])

        assert result.exit_code == 0
        tree = yaml.safe_load(result.output)
        assert tree["headers"] == {"Content-Type": "application/json"}
        assert tree["data"]["first_name"] == "Ada"

    def test_parse_from_stdin(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "-"], input="curl -X DELETE http://a/items/1\n")

        assert result.exit_code == 0
        assert json.loads(result.output)["method"] == "DELETE"

    def test_parse_failure(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "-"], input="curl -X POST\n")

        assert result.exit_code == 1
        assert "No URL found in curl command" in result.output

    def test_first_header_wins(self):
        runner = CliRunner()
        result = runner.invoke(
            main, ["parse", "-", "--first-header-wins"], input='curl -H "X: 1" -H "X: 2" http://a\n'
        )

        assert json.loads(result.output)["headers"] == {"X": "1"}


class TestCliGenerate:
    def test_generate_with_config(self, tmp_path):
        output_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "create_user.curl"),
            "-o", str(output_dir),
            "--config", str(FIXTURES / "codegen.yaml"),
        ])

        assert result.exit_code == 0, result.output
        assert (output_dir / "UserService.java").exists()
        assert (output_dir / "RequestBody.java").exists()
        assert (output_dir / "Address.java").exists()
        assert (output_dir / "pom.xml").exists()
        assert "Generated 4 files" in result.output

    def test_generate_defaults_to_full_class(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "list_pets.curl"),
            "-o", str(tmp_path),
            "--service-name", "PetService",
        ])

        assert result.exit_code == 0, result.output
        code = (tmp_path / "PetService.java").read_text()
        assert "public class PetService {" in code
        assert "Generated 1 files" in result.output

    def test_generate_method_snippet(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "list_pets.curl"),
            "-o", str(tmp_path),
            "--option", "method",
            "--method-name", "listPets",
        ])

        assert result.exit_code == 0, result.output
        assert "public void listPets()" in (tmp_path / "listPets.java").read_text()

    def test_cli_overrides_config_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "create_user.curl"),
            "-o", str(tmp_path),
            "--config", str(FIXTURES / "codegen.yaml"),
            "--service-name", "AccountService",
            "--no-pojo",
            "--no-pom",
        ])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == ["AccountService.java"]

    def test_generate_validation_failure(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "list_pets.curl"),
            "-o", str(tmp_path),
            "--service-name", "petService",
        ])

        assert result.exit_code == 1
        assert "service_name" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_generate_excludes_fields(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "list_pets.curl"),
            "-o", str(tmp_path),
            "--exclude", "auth",
        ])

        assert result.exit_code == 0, result.output
        assert ".auth()" not in (tmp_path / "ServiceName.java").read_text()

    @patch("curl_restassured.cli.generate")
    def test_generate_reports_result_errors(self, mock_generate, tmp_path):
        mock_generate.return_value = GenerationResult.failure({"_generate": "Code generation failed: boom"})

        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(FIXTURES / "list_pets.curl"), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Code generation failed: boom" in result.output
