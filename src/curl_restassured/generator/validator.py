"""Validates generation configs and requests before any code is rendered."""

import re

from curl_restassured.generator.config import GenerationConfig
from curl_restassured.generator.draft import RequestDraft

CLASS_NAME_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
METHOD_NAME_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
STATUS_CODE_MIN = 100
STATUS_CODE_MAX = 599


def validate_config(config: GenerationConfig) -> dict[str, str]:
    """Check generation options.

    Returns dict of {field: error_message}; empty when the config is usable.
    """
    errors = {}

    if not config.option:
        errors["option"] = "Please select a code generation option"

    method_name = config.method_name.strip()
    if not method_name:
        errors["method_name"] = "Method name is required"
    elif not METHOD_NAME_RE.match(method_name):
        errors["method_name"] = "Method name must start with a lowercase letter and contain only letters and digits"

    service_name = config.service_name.strip()
    if config.option == "full":
        if not service_name:
            errors["service_name"] = "Service name is required for full test class generation"
        elif not CLASS_NAME_RE.match(service_name):
            errors["service_name"] = "Service name must start with an uppercase letter and contain only letters and digits"

    if config.assertion_required:
        status = config.status_code.strip()
        if not status.isdigit():
            errors["status_code"] = "Status code must be a number"
        elif not STATUS_CODE_MIN <= int(status) <= STATUS_CODE_MAX:
            errors["status_code"] = f"Status code must be between {STATUS_CODE_MIN} and {STATUS_CODE_MAX}"

    if config.assert_response_time and config.max_response_time_ms <= 0:
        errors["max_response_time_ms"] = "Maximum response time must be positive"

    if config.include_retry and config.max_retries < 1:
        errors["max_retries"] = "Retry count must be at least 1"

    if config.need_pojo:
        pojo_name = config.pojo_class_name.strip()
        if not pojo_name:
            errors["pojo_class_name"] = "POJO class name is required when generating POJOs"
        elif not CLASS_NAME_RE.match(pojo_name):
            errors["pojo_class_name"] = "POJO class name must start with an uppercase letter"

    errors.update(validate_pom(config))
    return errors


def validate_pom(config: GenerationConfig) -> dict[str, str]:
    """Full POMs need complete project coordinates."""
    if not config.generate_pom:
        return {}
    pom = config.effective_pom_config
    if pom.pom_type != "full":
        return {}

    errors = {}
    info = pom.project_info
    for field, label in (("group_id", "Group ID"), ("artifact_id", "Artifact ID"), ("version", "Version")):
        if not getattr(info, field).strip():
            errors[f"pom_config.project_info.{field}"] = f"{label} is required for full POM generation"
    return errors


def validate_request(draft: RequestDraft) -> dict[str, str]:
    """A request can only be rendered when it has somewhere to go."""
    if not (draft.base_url or draft.url):
        return {"url": "URL is required in parsed data"}
    if not draft.method.strip():
        return {"method": "HTTP method is required"}
    return {}
