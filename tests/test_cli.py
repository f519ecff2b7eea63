import json
import shutil
from pathlib import Path

from click.testing import CliRunner

from contract_gate.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
MODULES = FIXTURES / "contract_output" / "modules"
BASELINES = FIXTURES / "contract_baseline" / "modules"


def _invoke(*args, modules_root=MODULES, baseline_root=BASELINES):
    runner = CliRunner()
    return runner.invoke(main, [
        "--modules-root", str(modules_root),
        "--baseline-root", str(baseline_root),
        *args,
    ])


def _copy_fixtures(tmp_path: Path) -> Path:
    modules_root = tmp_path / "modules"
    shutil.copytree(MODULES, modules_root)
    return modules_root


class TestCliSinglePasses:
    def test_validate_openapi(self):
        result = _invoke("validate-openapi")
        assert result.exit_code == 0
        assert result.output.strip() == "contract:validate:openapi passed"

    def test_validate_fe(self):
        result = _invoke("validate-fe")
        assert result.exit_code == 0
        assert "contract:validate:fe passed" in result.output

    def test_validate_db(self):
        result = _invoke("validate-db")
        assert result.exit_code == 0
        assert "contract:validate:db passed" in result.output

    def test_check_parity(self):
        result = _invoke("check-parity")
        assert result.exit_code == 0
        assert "contract:check:parity passed" in result.output

    def test_check_breaking(self):
        result = _invoke("check-breaking")
        assert result.exit_code == 0
        assert "contract:check:breaking passed" in result.output

    def test_verbose_flag(self):
        result = CliRunner().invoke(main, ["-v", "--modules-root", str(MODULES), "validate-openapi"])
        assert result.exit_code == 0
        assert "contract:validate:openapi passed" in result.output


class TestCliFailures:
    def test_missing_root_fails(self, tmp_path):
        result = _invoke("validate-db", modules_root=tmp_path / "missing")
        assert result.exit_code == 1
        assert "[DB_TRACEABILITY_FAIL] No module folders found in" in result.output
        assert "passed" not in result.output

    def test_schema_ref_parity_failure(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        fe_path = modules_root / "users" / "fe_details.json"
        fe = json.loads(fe_path.read_text(encoding="utf-8"))
        fe["screens"][0]["endpointProposals"][0]["responseSchemaRef"] = "zod://Missing"
        fe_path.write_text(json.dumps(fe), encoding="utf-8")

        result = _invoke("check-parity", modules_root=modules_root)
        assert result.exit_code == 1
        assert result.output.strip() == "[SCHEMA_REF_PARITY_FAIL] Missing schema in zod_patch: Missing"

    def test_breaking_change_failure(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        openapi_path = modules_root / "users" / "openapi.json"
        doc = json.loads(openapi_path.read_text(encoding="utf-8"))
        del doc["paths"]["/api/users"]["get"]
        openapi_path.write_text(json.dumps(doc), encoding="utf-8")

        result = _invoke("check-breaking", modules_root=modules_root)
        assert result.exit_code == 1
        assert "[BREAKING_CHANGE_UNAPPROVED] Removed endpoint: users -> GET /api/users" in result.output

    def test_malformed_document(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        (modules_root / "users" / "prisma_contract.json").write_text("{", encoding="utf-8")

        result = _invoke("validate-db", modules_root=modules_root)
        assert result.exit_code == 1
        assert result.output.startswith("[DOCUMENT_PARSE_ERROR] Invalid JSON in ")

    def test_invalid_utf8_document(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        (modules_root / "users" / "openapi.json").write_bytes(b'{"openapi": "3.0.0\xff"}')

        result = _invoke("validate-openapi", modules_root=modules_root)
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.output.startswith("[DOCUMENT_PARSE_ERROR] Invalid UTF-8 in ")

    def test_non_string_schema_id(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        zod_path = modules_root / "users" / "zod_patch.json"
        zod_path.write_text(json.dumps({"moduleId": "users", "schemas": [{"schemaId": ["UserList"]}]}), encoding="utf-8")

        result = _invoke("check-parity", modules_root=modules_root)
        assert result.exit_code == 1
        assert result.output.strip() == "[SCHEMA_REF_PARITY_FAIL] Missing schema in zod_patch: UserList"


class TestCliPathNormalization:
    def _colon_param_module(self, tmp_path: Path) -> Path:
        modules_root = _copy_fixtures(tmp_path)
        users = modules_root / "users"
        (users / "openapi.json").write_text(json.dumps({
            "openapi": "3.0.0",
            "paths": {"/api/users/{id}": {"get": {}}},
        }), encoding="utf-8")
        (users / "fe_details.json").write_text(json.dumps({
            "moduleId": "users",
            "screens": [{"type": "api_driven", "endpointProposals": [{"method": "GET", "path": "/api/users/:id"}]}],
        }), encoding="utf-8")
        return modules_root

    def test_flag_enables_normalization(self, tmp_path):
        modules_root = self._colon_param_module(tmp_path)
        assert _invoke("check-parity", modules_root=modules_root).exit_code == 1
        result = _invoke("--normalize-path-params", "check-parity", modules_root=modules_root)
        assert result.exit_code == 0

    def test_env_setting_applies_without_flag(self, tmp_path):
        modules_root = self._colon_param_module(tmp_path)
        result = CliRunner().invoke(
            main,
            ["--modules-root", str(modules_root), "check-parity"],
            env={"CONTRACT_GATE_NORMALIZE_PATH_PARAMS": "true"},
        )
        assert result.exit_code == 0

    def test_no_flag_overrides_env_setting(self, tmp_path):
        modules_root = self._colon_param_module(tmp_path)
        result = CliRunner().invoke(
            main,
            ["--modules-root", str(modules_root), "--no-normalize-path-params", "check-parity"],
            env={"CONTRACT_GATE_NORMALIZE_PATH_PARAMS": "true"},
        )
        assert result.exit_code == 1
        assert "[ENDPOINT_PARITY_FAIL] Missing endpoint in openapi: GET /api/users/:id" in result.output


class TestCliAll:
    def test_all_passes(self):
        result = _invoke("all")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines == [
            "contract:validate:openapi passed",
            "contract:validate:fe passed",
            "contract:validate:db passed",
            "contract:check:parity passed",
            "contract:check:breaking passed",
        ]

    def test_all_stops_at_first_failure(self, tmp_path):
        modules_root = _copy_fixtures(tmp_path)
        zod_path = modules_root / "users" / "zod_patch.json"
        zod_path.write_text(json.dumps({"moduleId": "users", "schemas": []}), encoding="utf-8")

        result = _invoke("all", modules_root=modules_root)
        assert result.exit_code == 1
        lines = result.output.strip().splitlines()
        assert lines[0] == "contract:validate:openapi passed"
        assert lines[1].startswith("[FE_SCHEMA_INVALID] schemas must be non-empty array in ")
        assert len(lines) == 2
