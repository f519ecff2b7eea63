"""Cross-document parity: what the front end calls must exist in the backend contract."""

import logging

from contract_gate.errors import ContractViolation, ViolationCode
from contract_gate.parser.endpoints import extract_api_endpoints, iter_frontend_endpoints
from contract_gate.parser.schema_refs import collect_schema_ids, iter_schema_refs, parse_schema_ref
from contract_gate.repository import DocumentKind

from .base import CheckContext

logger = logging.getLogger(__name__)


def check_endpoint_parity(fe: dict, openapi: dict, normalize_params: bool = False) -> None:
    """Every front-end endpoint must be declared in openapi.json.

    The reverse is not required: the API may expose endpoints no screen uses yet.
    """
    api_endpoints = extract_api_endpoints(openapi, normalize_params)
    for endpoint in iter_frontend_endpoints(fe, normalize_params):
        if endpoint not in api_endpoints:
            raise ContractViolation(
                ViolationCode.ENDPOINT_PARITY_FAIL, f"Missing endpoint in openapi: {endpoint}"
            )


def check_schema_ref_parity(fe: dict, zod: dict) -> None:
    """Every schema reference must be a ``zod://`` pointer to a declared schema."""
    code = ViolationCode.SCHEMA_REF_PARITY_FAIL
    schema_ids = collect_schema_ids(zod)
    for use in iter_schema_refs(fe):
        schema_id = parse_schema_ref(use.ref)
        if schema_id is None:
            raise ContractViolation(code, f"Invalid zod ref format: {use.ref}")
        if schema_id not in schema_ids:
            raise ContractViolation(code, f"Missing schema in zod_patch: {schema_id}")


def check_parity(context: CheckContext) -> list[str]:
    repo = context.modules
    normalize = context.settings.normalize_path_params
    checked = []
    for module in context.require_modules(ViolationCode.ENDPOINT_PARITY_FAIL):
        repo.require_documents(module, (DocumentKind.FE_DETAILS,), ViolationCode.ENDPOINT_PARITY_FAIL)
        repo.require_documents(module, (DocumentKind.ZOD_PATCH,), ViolationCode.SCHEMA_REF_PARITY_FAIL)
        repo.require_documents(module, (DocumentKind.OPENAPI,), ViolationCode.ENDPOINT_PARITY_FAIL)

        fe = repo.load_document(module, DocumentKind.FE_DETAILS, ViolationCode.ENDPOINT_PARITY_FAIL)
        zod = repo.load_document(module, DocumentKind.ZOD_PATCH, ViolationCode.SCHEMA_REF_PARITY_FAIL)
        openapi = repo.load_document(module, DocumentKind.OPENAPI, ViolationCode.ENDPOINT_PARITY_FAIL)

        check_endpoint_parity(fe, openapi, normalize)
        check_schema_ref_parity(fe, zod)
        logger.debug("Front end of %s is in parity with its backend contract", module.name)
        checked.append(module.name)
    return checked
