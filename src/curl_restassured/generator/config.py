"""Generation options for REST-assured, POJO and POM output."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_POJO_ANNOTATIONS = ["@Data", "@Builder", "@NoArgsConstructor", "@AllArgsConstructor"]


class _Options(BaseModel):
    # camelCase aliases let configs written for the web editor load unchanged
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class PomProjectInfo(_Options):
    group_id: str = "com.example"
    artifact_id: str = "rest-assured-tests"
    version: str = "1.0-SNAPSHOT"
    name: str = "REST Assured Test Project"
    description: str = "Automated REST API tests using REST Assured"


class PomConfig(_Options):
    """Maven descriptor options; only read when ``generate_pom`` is set."""

    pom_type: Literal["full", "dependencies_only"] = "full"
    project_info: PomProjectInfo = PomProjectInfo()
    include_junit: bool = False
    include_allure: bool = False
    include_extent: bool = False
    include_excel: bool = False
    include_faker: bool = False
    include_logging: bool = True
    include_commons_io: bool = False
    java_version: Literal["8", "11", "17", "21"] = "11"


class GenerationConfig(_Options):
    """What to generate and how. Built once per request, never mutated."""

    option: Literal["full", "method"] | None = None
    service_name: str = "ServiceName"
    method_name: str = "apiNameTest"
    assertion_required: bool = True
    status_code: str = "200"
    logging_required: bool = True
    need_pojo: bool = False
    pojo_class_name: str = "RequestBody"
    pojo_annotations: list[str] = DEFAULT_POJO_ANNOTATIONS
    use_fluent_api: bool = False
    include_retry: bool = False
    max_retries: int = 2
    test_groups: list[str] = ["smoke"]
    test_priority: int | None = 1
    test_description: str = "Generated REST-Assured test"
    assert_response_time: bool = False
    max_response_time_ms: int = 2000
    generate_pom: bool = False
    pom_config: PomConfig | None = None

    @property
    def effective_pom_config(self) -> PomConfig:
        return self.pom_config or PomConfig()


class GenerationResult(BaseModel):
    success: bool
    test_code: str | None = None
    pojo_code: str | None = None
    pojo_classes: dict[str, str] = {}
    pom_xml: str | None = None
    error: str | None = None
    errors: dict[str, str] = {}

    @classmethod
    def failure(cls, errors: dict[str, str]) -> "GenerationResult":
        return cls(success=False, error=next(iter(errors.values())), errors=errors)


def load_config(path: Path, **overrides) -> GenerationConfig:
    """Load a YAML generation config, applying non-None keyword overrides."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of generation options")
    for key, value in overrides.items():
        if value is not None:
            data.pop(key, None)
            data[to_camel(key)] = value
    return GenerationConfig.model_validate(data)
