"""cURL command parser entry point.

Tokenizes a raw curl command, interprets its flags and normalizes the
result into a CanonicalRequest.
"""

import logging

from pydantic import ValidationError

from curl_restassured.parser.base import ParseResult, ParserOptions
from curl_restassured.parser.flags import FlagInterpreter
from curl_restassured.parser.normalize import normalize
from curl_restassured.parser.tokenizer import UnterminatedQuoteError, tokenize

logger = logging.getLogger(__name__)


def parse_curl(command: str, options: ParserOptions | None = None) -> ParseResult:
    """Parse a curl command string into a ParseResult.

    Malformed flags degrade to defaults; only input that yields no usable
    request (nothing to parse, no URL) is reported as a failure.
    """
    options = options or ParserOptions()

    if not command or not command.strip():
        return ParseResult(success=False, error="Empty curl command")

    try:
        tokens = tokenize(command, strict=options.strict_quotes)
    except UnterminatedQuoteError as e:
        return ParseResult(success=False, error=str(e))

    raw = FlagInterpreter(options).interpret(tokens)
    if not raw.get("url"):
        return ParseResult(success=False, error="No URL found in curl command")

    result = parse_request(raw)
    if result.success:
        logger.debug("Parsed %s %s", result.request.method, result.request.url)
    return result


def parse_request(raw: dict) -> ParseResult:
    """Normalize an already-parsed request dict (flat or grouped shape)."""
    if not isinstance(raw, dict):
        return ParseResult(success=False, error="Request data must be an object")
    if not (raw.get("url") or raw.get("full_url") or raw.get("base_url")):
        return ParseResult(success=False, error="No URL found in request data")

    try:
        request = normalize(raw)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return ParseResult(success=False, error=f"Invalid request data: {location}: {first['msg']}")
    except (AttributeError, TypeError) as e:
        logger.debug("Malformed request data: %s", e)
        return ParseResult(success=False, error=f"Malformed request data: {e}")
    return ParseResult(success=True, request=request)
