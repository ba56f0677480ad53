"""Field projection over parsed requests.

Used before code generation or export to drop the fields a user unticked.
Paths are dotted: ``headers.Accept``, ``network_config.retry``,
``path_parameters.0``. Paths missing from the mapping are kept.
"""

import copy
import logging
from typing import Any

from pydantic import ValidationError

from curl_restassured.parser.base import CanonicalRequest

logger = logging.getLogger(__name__)


def filter_tree(obj: Any, allowed: dict[str, bool], path: tuple[str, ...] = ()) -> Any:
    """Return a deep copy of ``obj`` without the paths mapped to False."""
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            child = (*path, str(key))
            if allowed.get(".".join(child)) is not False:
                result[key] = filter_tree(value, allowed, child)
        return result

    if isinstance(obj, list):
        result = []
        for index, value in enumerate(obj):
            child = (*path, str(index))
            if allowed.get(".".join(child)) is not False:
                result.append(filter_tree(value, allowed, child))
        return result

    return copy.deepcopy(obj)


def project(model: CanonicalRequest | dict, allowed: dict[str, bool]) -> CanonicalRequest | dict:
    """Filter a request by an inclusion map.

    A CanonicalRequest is filtered through its pruned tree form and rebuilt;
    a plain dict is filtered as-is and returned as a dict. A top-level group
    left invalid by the filter (e.g. ``auth`` without its ``type``) is
    dropped as a whole.
    """
    if isinstance(model, CanonicalRequest):
        tree = filter_tree(model.to_tree(), allowed)
        try:
            return CanonicalRequest.from_tree(tree)
        except ValidationError as e:
            broken = {err["loc"][0] for err in e.errors() if err["loc"]}
            logger.debug("Dropping fields left incomplete by projection: %s", sorted(broken))
            return CanonicalRequest.from_tree({k: v for k, v in tree.items() if k not in broken})
    return filter_tree(model, allowed)


def exclusions(paths: list[str] | tuple[str, ...]) -> dict[str, bool]:
    """Build an inclusion map that drops each of ``paths``."""
    return {path: False for path in paths}
