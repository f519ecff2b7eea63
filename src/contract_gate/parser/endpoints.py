"""Endpoint extraction.

Turns the two endpoint-bearing document kinds (openapi.json and
fe_details.json) into canonical ``"METHOD path"`` identifiers. The
``iter_*`` variants keep document order; the ``extract_*`` variants
return sets for membership tests.
"""

import re
from collections.abc import Iterator

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

_COLON_PARAM = re.compile(r"/:([A-Za-z_][A-Za-z0-9_]*)")


def endpoint_key(method, path) -> str:
    """Build the canonical identifier, upper-casing the method."""
    return f"{str(method).upper()} {path}"


def normalize_path_template(path):
    """Rewrite express-style ``/:id`` segments as ``/{id}``."""
    if not isinstance(path, str):
        return path
    return _COLON_PARAM.sub(r"/{\1}", path)


def iter_api_endpoints(doc: dict, normalize_params: bool = False) -> Iterator[str]:
    """Yield supported-verb endpoints declared under ``paths``.

    Non-object operation maps and operations are skipped; other verbs
    (head, options, trace, ...) are ignored rather than rejected.
    """
    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        return

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        if normalize_params:
            path = normalize_path_template(path)
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue
            if method.upper() not in SUPPORTED_METHODS:
                continue
            yield endpoint_key(method, path)


def iter_frontend_endpoints(doc: dict, normalize_params: bool = False) -> Iterator[str]:
    """Yield the endpoint proposed by every screen, in document order.

    No verb allow-list here: an unknown method produces an identifier that
    can never match openapi.json, so it surfaces as a parity failure.
    """
    for screen in doc.get("screens") or []:
        if not isinstance(screen, dict):
            continue
        for proposal in screen.get("endpointProposals") or []:
            if not isinstance(proposal, dict):
                continue
            path = proposal.get("path")
            if normalize_params:
                path = normalize_path_template(path)
            yield endpoint_key(proposal.get("method"), path)


def extract_api_endpoints(doc: dict, normalize_params: bool = False) -> set[str]:
    return set(iter_api_endpoints(doc, normalize_params))


def extract_frontend_endpoints(doc: dict, normalize_params: bool = False) -> set[str]:
    return set(iter_frontend_endpoints(doc, normalize_params))
