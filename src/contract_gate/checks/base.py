"""Shared plumbing for the contract check passes."""

from pydantic import BaseModel

from contract_gate.config import Settings
from contract_gate.errors import ContractViolation, ViolationCode
from contract_gate.parser.base import ModuleHandle
from contract_gate.repository import ModuleRepository


class CheckContext:
    """Everything a pass needs: settings plus current and baseline repositories."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.modules = ModuleRepository(settings.modules_root)
        self.baselines = ModuleRepository(settings.baseline_root)

    def require_modules(self, code: ViolationCode) -> list[ModuleHandle]:
        """List current modules, failing with ``code`` when there are none."""
        modules = self.modules.list_modules()
        if not modules:
            raise ContractViolation(code, f"No module folders found in {self.modules.root}")
        return modules


class Violation(BaseModel):
    code: ViolationCode
    message: str

    @classmethod
    def from_exception(cls, exc: ContractViolation) -> "Violation":
        return cls(code=exc.code, message=exc.message)

    def render(self) -> str:
        return f"[{self.code.value}] {self.message}"


class CheckResult(BaseModel):
    """Outcome of one pass: either every module passed or the first violation."""

    name: str  # validate:openapi, check:parity, ...
    modules: list[str] = []
    violation: Violation | None = None

    @property
    def passed(self) -> bool:
        return self.violation is None

    def summary(self) -> str:
        if self.violation is not None:
            return self.violation.render()
        return f"contract:{self.name} passed"
