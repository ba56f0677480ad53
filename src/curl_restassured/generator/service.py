"""Generation entry point: request + config -> test code, POJOs, pom.xml."""

import logging

from pydantic import ValidationError

from curl_restassured.generator.code import RestAssuredGenerator
from curl_restassured.generator.config import GenerationConfig, GenerationResult
from curl_restassured.generator.draft import RequestDraft
from curl_restassured.generator.pojo import PojoGenerator, combine_classes
from curl_restassured.generator.pom import PomGenerator
from curl_restassured.generator.validator import validate_config, validate_request
from curl_restassured.parser.base import CanonicalRequest

logger = logging.getLogger(__name__)


def _errors_from(e: ValidationError, prefix: str) -> dict[str, str]:
    errors = {}
    for err in e.errors():
        location = ".".join(str(part) for part in err["loc"])
        errors[f"{prefix}.{location}" if location else prefix] = err["msg"]
    return errors


def _to_draft(model: CanonicalRequest | RequestDraft | dict) -> RequestDraft:
    if isinstance(model, RequestDraft):
        return model
    if isinstance(model, dict):
        model = CanonicalRequest.from_tree(model)
    return RequestDraft.from_request(model)


def generate(
    model: CanonicalRequest | RequestDraft | dict,
    config: GenerationConfig | dict,
) -> GenerationResult:
    """Render REST-assured code for ``model``.

    All validation runs before rendering starts, so a failed result never
    carries partial output. Errors are reported in the result, not raised.
    """
    try:
        if isinstance(config, dict):
            config = GenerationConfig.model_validate(config)
    except ValidationError as e:
        return GenerationResult.failure(_errors_from(e, "config"))

    try:
        draft = _to_draft(model)
    except ValidationError as e:
        return GenerationResult.failure(_errors_from(e, "request"))

    errors = validate_config(config)
    errors.update(validate_request(draft))
    if errors:
        logger.debug("Generation rejected: %s", errors)
        return GenerationResult.failure(errors)

    try:
        test_code = RestAssuredGenerator(config).generate(draft)

        pojo_classes: dict[str, str] = {}
        if config.need_pojo:
            pojo_classes = PojoGenerator(config.pojo_class_name.strip(), config.pojo_annotations).generate(draft.body)
            if not pojo_classes:
                logger.info("Request body is not a JSON object, no POJO generated")

        pom_xml = PomGenerator(config).generate(draft) if config.generate_pom else None
    except Exception as e:
        logger.exception("Code generation failed")
        return GenerationResult.failure({"_generate": f"Code generation failed: {e}"})

    return GenerationResult(
        success=True,
        test_code=test_code,
        pojo_code=combine_classes(pojo_classes) if pojo_classes else None,
        pojo_classes=pojo_classes,
        pom_xml=pom_xml,
    )
