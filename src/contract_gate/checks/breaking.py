"""Breaking-change detection against the accepted baseline openapi.json.

Only strict removals count: an endpoint present in the baseline but absent
from the current document. Renaming a path parameter therefore reads as a
removal plus an addition.
"""

import logging

from contract_gate.errors import ContractViolation, ViolationCode
from contract_gate.parser.endpoints import extract_api_endpoints, iter_api_endpoints
from contract_gate.repository import DocumentKind

from .base import CheckContext

logger = logging.getLogger(__name__)


def find_removed_endpoints(baseline: dict, current: dict, normalize_params: bool = False) -> list[str]:
    """Baseline endpoints missing from the current document, in baseline order."""
    current_endpoints = extract_api_endpoints(current, normalize_params)
    removed = []
    for endpoint in iter_api_endpoints(baseline, normalize_params):
        if endpoint not in current_endpoints and endpoint not in removed:
            removed.append(endpoint)
    return removed


def check_breaking(context: CheckContext) -> list[str]:
    code = ViolationCode.BREAKING_CHANGE_UNAPPROVED
    normalize = context.settings.normalize_path_params
    checked = []
    for module in context.require_modules(code):
        context.modules.require_documents(module, (DocumentKind.OPENAPI,), code)
        checked.append(module.name)

        baseline_module = context.baselines.get_module(module.name)
        if baseline_module is None or not context.baselines.has_document(baseline_module, DocumentKind.OPENAPI):
            logger.debug("No baseline for %s, skipping", module.name)
            continue

        current = context.modules.load_document(module, DocumentKind.OPENAPI, code)
        baseline = context.baselines.load_document(baseline_module, DocumentKind.OPENAPI, code)

        removed = find_removed_endpoints(baseline, current, normalize)
        if removed:
            raise ContractViolation(code, f"Removed endpoint: {module.name} -> {removed[0]}")
        logger.debug("%s keeps every baseline endpoint", module.name)
    return checked
