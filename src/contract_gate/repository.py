"""Module repository — lists module bundles and loads their documents."""

import json
import logging
from enum import Enum
from pathlib import Path

from contract_gate.errors import MalformedDocument, MissingDocument, ViolationCode
from contract_gate.parser.base import ModuleHandle

logger = logging.getLogger(__name__)


class DocumentKind(str, Enum):
    OPENAPI = "openapi.json"
    FE_DETAILS = "fe_details.json"
    ZOD_PATCH = "zod_patch.json"
    PRISMA_CONTRACT = "prisma_contract.json"

    @property
    def filename(self) -> str:
        return self.value


class ModuleRepository:
    """Read-only view over a directory with one sub-directory per module."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def list_modules(self) -> list[ModuleHandle]:
        """Return a handle per module directory, sorted by name.

        An absent root yields an empty list; plain files are ignored.
        """
        if not self.root.is_dir():
            logger.debug("Modules root %s does not exist", self.root)
            return []
        return [
            ModuleHandle(name=entry.name, path=entry)
            for entry in sorted(self.root.iterdir(), key=lambda p: p.name)
            if entry.is_dir()
        ]

    def get_module(self, name: str) -> ModuleHandle | None:
        path = self.root / name
        if not path.is_dir():
            return None
        return ModuleHandle(name=name, path=path)

    def document_path(self, module: ModuleHandle, kind: DocumentKind) -> Path:
        return module.path / kind.filename

    def has_document(self, module: ModuleHandle, kind: DocumentKind) -> bool:
        return self.document_path(module, kind).is_file()

    def require_documents(
        self, module: ModuleHandle, kinds: tuple[DocumentKind, ...], code: ViolationCode
    ) -> None:
        """Fail on the first missing document before any of them is parsed."""
        for kind in kinds:
            if not self.has_document(module, kind):
                raise MissingDocument(code, f"Missing {kind.filename} in {module.path}")

    def load_document(self, module: ModuleHandle, kind: DocumentKind, code: ViolationCode) -> dict:
        """Read and parse one document of a module.

        ``code`` is the violation code reported when the file is missing,
        so each pass keeps its own failure code for absent inputs.
        """
        path = self.document_path(module, kind)
        if not path.is_file():
            raise MissingDocument(code, f"Missing {kind.filename} in {module.path}")

        logger.debug("Loading %s", path)
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedDocument(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})") from e
        except UnicodeDecodeError as e:
            raise MalformedDocument(f"Invalid UTF-8 in {path}: {e.reason} (byte {e.start})") from e
        except RecursionError as e:
            raise MalformedDocument(f"JSON nested too deeply in {path}") from e

        if not isinstance(doc, dict):
            raise MalformedDocument(f"Expected a JSON object at the top level of {path}")
        return doc
