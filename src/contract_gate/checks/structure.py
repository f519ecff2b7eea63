"""Structural validators for the four document kinds.

Each ``validate_*`` function inspects one parsed document and raises a
ContractViolation on the first problem found. The ``check_*`` passes run
them over every module and stop at the first failing one.
"""

import logging

from contract_gate.errors import ContractViolation, ViolationCode
from contract_gate.repository import DocumentKind

from .base import CheckContext

logger = logging.getLogger(__name__)

OPENAPI_VERSION_PREFIX = "3."
API_PATH_PREFIX = "/api/"
SCREEN_TYPES = ("static", "api_driven", "input_driven")


def _non_empty_str(value) -> bool:
    return isinstance(value, str) and len(value) > 0


def _non_empty_list(value) -> bool:
    return isinstance(value, list) and len(value) > 0


def validate_openapi_document(doc: dict, source: str) -> None:
    code = ViolationCode.OPENAPI_INVALID

    version = doc.get("openapi")
    if not (isinstance(version, str) and version.startswith(OPENAPI_VERSION_PREFIX)):
        raise ContractViolation(code, f"openapi version missing/invalid in {source}")

    paths = doc.get("paths")
    if not isinstance(paths, dict):
        raise ContractViolation(code, f"paths missing in {source}")
    if not paths:
        raise ContractViolation(code, f"paths empty in {source}")

    for path, operations in paths.items():
        if not path.startswith(API_PATH_PREFIX):
            raise ContractViolation(code, f"path must start with {API_PATH_PREFIX}: {path}")
        if not isinstance(operations, dict):
            raise ContractViolation(code, f"invalid operations object for {path}")


def _validate_fe_header(doc: dict, source: str) -> None:
    code = ViolationCode.FE_SCHEMA_INVALID

    if not _non_empty_str(doc.get("moduleId")):
        raise ContractViolation(code, f"Invalid moduleId in {source}")
    if not isinstance(doc.get("screens"), list):
        raise ContractViolation(code, f"screens must be array in {source}")


def _validate_fe_screens(doc: dict, source: str) -> None:
    code = ViolationCode.FE_SCHEMA_INVALID

    for index, screen in enumerate(doc["screens"]):
        if not isinstance(screen, dict) or screen.get("type") not in SCREEN_TYPES:
            raise ContractViolation(code, f"Invalid screen type at screens[{index}] in {source}")
        if not isinstance(screen.get("endpointProposals"), list):
            raise ContractViolation(
                code, f"endpointProposals must be array at screens[{index}] in {source}"
            )


def validate_fe_document(doc: dict, source: str) -> None:
    _validate_fe_header(doc, source)
    _validate_fe_screens(doc, source)


def validate_fe_bundle(fe: dict, zod: dict, fe_source: str, zod_source: str) -> None:
    """Validate fe_details.json and its zod_patch.json as one unit.

    Document-level fields of both files are checked before any screen.
    """
    _validate_fe_header(fe, fe_source)
    validate_schema_patch_document(zod, zod_source)
    _validate_fe_screens(fe, fe_source)


def validate_schema_patch_document(doc: dict, source: str) -> None:
    code = ViolationCode.FE_SCHEMA_INVALID

    if not _non_empty_str(doc.get("moduleId")):
        raise ContractViolation(code, f"Invalid moduleId in {source}")
    if not _non_empty_list(doc.get("schemas")):
        raise ContractViolation(code, f"schemas must be non-empty array in {source}")


def validate_db_contract(doc: dict, source: str) -> None:
    code = ViolationCode.DB_TRACEABILITY_FAIL

    models = doc.get("models")
    if not _non_empty_list(models):
        raise ContractViolation(code, f"models must be non-empty in {source}")

    for model in models:
        if not isinstance(model, dict):
            raise ContractViolation(code, f"model entries must be objects in {source}")
        name = model.get("model")
        fields = model.get("fields")
        if not _non_empty_list(fields):
            raise ContractViolation(code, f"model fields must be non-empty for {name}")
        for field in fields:
            if not isinstance(field, dict) or not _non_empty_list(field.get("sourceRefs")):
                field_name = field.get("name") if isinstance(field, dict) else None
                raise ContractViolation(code, f"field sourceRefs required for {name}.{field_name}")


def check_openapi(context: CheckContext) -> list[str]:
    code = ViolationCode.OPENAPI_INVALID
    checked = []
    for module in context.require_modules(code):
        doc = context.modules.load_document(module, DocumentKind.OPENAPI, code)
        source = str(context.modules.document_path(module, DocumentKind.OPENAPI))
        validate_openapi_document(doc, source)
        logger.debug("openapi.json of %s is well-formed", module.name)
        checked.append(module.name)
    return checked


def check_fe(context: CheckContext) -> list[str]:
    """Validate fe_details.json together with its paired zod_patch.json."""
    code = ViolationCode.FE_SCHEMA_INVALID
    repo = context.modules
    checked = []
    for module in context.require_modules(code):
        repo.require_documents(module, (DocumentKind.FE_DETAILS, DocumentKind.ZOD_PATCH), code)

        fe = repo.load_document(module, DocumentKind.FE_DETAILS, code)
        zod = repo.load_document(module, DocumentKind.ZOD_PATCH, code)
        fe_source = str(repo.document_path(module, DocumentKind.FE_DETAILS))
        zod_source = str(repo.document_path(module, DocumentKind.ZOD_PATCH))

        validate_fe_bundle(fe, zod, fe_source, zod_source)
        logger.debug("fe_details.json and zod_patch.json of %s are well-formed", module.name)
        checked.append(module.name)
    return checked


def check_db(context: CheckContext) -> list[str]:
    code = ViolationCode.DB_TRACEABILITY_FAIL
    checked = []
    for module in context.require_modules(code):
        doc = context.modules.load_document(module, DocumentKind.PRISMA_CONTRACT, code)
        source = str(context.modules.document_path(module, DocumentKind.PRISMA_CONTRACT))
        validate_db_contract(doc, source)
        logger.debug("prisma_contract.json of %s is fully traceable", module.name)
        checked.append(module.name)
    return checked
