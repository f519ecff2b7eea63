"""Schema reference resolution for ``zod://<schemaId>`` pointers."""

from collections.abc import Iterator

from .base import SchemaRefUse

SCHEMA_REF_PREFIX = "zod://"

SCHEMA_REF_FIELDS = ("requestSchemaRef", "responseSchemaRef", "errorSchemaRef")


def parse_schema_ref(ref) -> str | None:
    """Return the schema id of a ``zod://`` reference, or None if malformed."""
    if not isinstance(ref, str):
        return None
    if not ref.startswith(SCHEMA_REF_PREFIX):
        return None
    return ref[len(SCHEMA_REF_PREFIX):]


def collect_schema_ids(doc: dict) -> set[str]:
    """Registry of schema ids declared by a zod_patch document."""
    ids = set()
    for schema in doc.get("schemas") or []:
        if not isinstance(schema, dict):
            continue
        schema_id = schema.get("schemaId")
        # a non-string id can never match a parsed zod:// id
        if isinstance(schema_id, str) and schema_id:
            ids.add(schema_id)
    return ids


def iter_schema_refs(doc: dict) -> Iterator[SchemaRefUse]:
    """Yield every non-null schema reference of a fe_details document, in order."""
    for screen_index, screen in enumerate(doc.get("screens") or []):
        if not isinstance(screen, dict):
            continue
        for proposal_index, proposal in enumerate(screen.get("endpointProposals") or []):
            if not isinstance(proposal, dict):
                continue
            for field in SCHEMA_REF_FIELDS:
                ref = proposal.get(field)
                if ref is None:
                    continue
                yield SchemaRefUse(
                    screen_index=screen_index,
                    proposal_index=proposal_index,
                    field=field,
                    ref=ref,
                )
