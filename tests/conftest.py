import json
from pathlib import Path

import pytest

from contract_gate.checks.base import CheckContext
from contract_gate.config import Settings

FIXTURES = Path(__file__).parent / "fixtures"


class Workspace:
    """A throwaway contract_output / contract_baseline pair under tmp_path."""

    def __init__(self, root: Path):
        self.modules_root = root / "contract_output" / "modules"
        self.baseline_root = root / "contract_baseline" / "modules"

    def write(self, module: str, filename: str, data, baseline: bool = False) -> Path:
        root = self.baseline_root if baseline else self.modules_root
        path = root / module / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def write_bundle(self, module: str, bundle: dict) -> None:
        for filename, data in bundle.items():
            self.write(module, filename, data)

    def context(self, **settings) -> CheckContext:
        return CheckContext(
            Settings(modules_root=self.modules_root, baseline_root=self.baseline_root, **settings)
        )


@pytest.fixture
def workspace(tmp_path):
    return Workspace(tmp_path)


@pytest.fixture
def users_bundle():
    """The minimal passing users module: one screen listing users."""
    return {
        "openapi.json": {
            "openapi": "3.0.3",
            "paths": {"/api/users": {"get": {}, "post": {}}},
        },
        "fe_details.json": {
            "moduleId": "users",
            "screens": [
                {
                    "type": "api_driven",
                    "endpointProposals": [
                        {"method": "GET", "path": "/api/users", "responseSchemaRef": "zod://UserList"}
                    ],
                }
            ],
        },
        "zod_patch.json": {"moduleId": "users", "schemas": [{"schemaId": "UserList"}]},
        "prisma_contract.json": {
            "models": [{"model": "User", "fields": [{"name": "id", "sourceRefs": ["REQ-1"]}]}]
        },
    }
