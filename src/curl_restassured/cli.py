"""CLI entry point for curl-restassured."""

import json
import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from curl_restassured.generator.config import GenerationConfig, load_config
from curl_restassured.generator.service import generate
from curl_restassured.parser.base import CanonicalRequest, ParserOptions
from curl_restassured.parser.curl import parse_curl
from curl_restassured.projection import exclusions, project


def _parse_source(source, strict_quotes: bool = False, first_header_wins: bool = False) -> CanonicalRequest:
    """Read a curl command and parse it, failing the command on errors."""
    options = ParserOptions(
        strict_quotes=strict_quotes,
        duplicate_headers="first" if first_header_wins else "last",
    )
    result = parse_curl(source.read(), options)
    if not result.success:
        raise click.ClickException(result.error)
    return result.request


def _build_config(config_path: Path | None, **overrides) -> GenerationConfig:
    try:
        if config_path:
            return load_config(config_path, **overrides)
        return GenerationConfig(**{k: v for k, v in overrides.items() if v is not None})
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid generation config: {e}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """curl-restassured: turn curl commands into REST-assured tests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--exclude", multiple=True, help="Dotted field path to drop, e.g. headers.Cookie.")
@click.option("--strict-quotes", is_flag=True, help="Fail on unterminated quotes.")
@click.option("--first-header-wins", is_flag=True, help="Keep the first of duplicate headers.")
def parse(source, fmt: str, exclude: tuple[str, ...], strict_quotes: bool, first_header_wins: bool):
    """Parse a curl command (file or - for stdin) and print the request."""
    request = _parse_source(source, strict_quotes, first_header_wins)
    if exclude:
        request = project(request, exclusions(exclude))

    tree = request.to_tree()
    if fmt == "yaml":
        click.echo(yaml.safe_dump(tree, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(tree, indent=2, ensure_ascii=False))


@main.command("generate")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for generated files.")
@click.option("--config", "config_path", type=click.Path(exists=True, path_type=Path), help="YAML file with generation options.")
@click.option("--option", type=click.Choice(["full", "method"]), default=None, help="Full test class or method only.")
@click.option("--service-name", default=None, help="Test class name.")
@click.option("--method-name", default=None, help="Test method name.")
@click.option("--pojo/--no-pojo", "need_pojo", default=None, help="Generate POJOs for the JSON body.")
@click.option("--pom/--no-pom", "generate_pom", default=None, help="Generate a pom.xml.")
@click.option("--exclude", multiple=True, help="Dotted field path to drop before generating.")
def generate_cmd(source, output: Path, config_path: Path | None, option: str | None, service_name: str | None,
                 method_name: str | None, need_pojo: bool | None, generate_pom: bool | None,
                 exclude: tuple[str, ...]):
    """Generate REST-assured test code from a curl command."""
    request = _parse_source(source)
    click.echo(f"Parsed {request.method} {request.url}")
    if exclude:
        request = project(request, exclusions(exclude))

    config = _build_config(
        config_path,
        option=option,
        service_name=service_name,
        method_name=method_name,
        need_pojo=need_pojo,
        generate_pom=generate_pom,
    )
    if config.option is None:
        config = config.model_copy(update={"option": "full"})

    result = generate(request, config)
    if not result.success:
        for field, message in result.errors.items():
            click.echo(f"  {field}: {message}", err=True)
        raise click.ClickException(result.error)

    output.mkdir(parents=True, exist_ok=True)
    name = config.service_name if config.option == "full" else config.method_name
    files = {f"{name.strip()}.java": result.test_code}
    for class_name, source_code in result.pojo_classes.items():
        files[f"{class_name}.java"] = source_code
    if result.pom_xml:
        files["pom.xml"] = result.pom_xml

    for filename, content in files.items():
        file_path = output / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")

    click.echo(f"Generated {len(files)} files in {output}")
