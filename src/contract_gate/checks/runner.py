"""Registry of contract checks and the fail-fast runner."""

import logging
from collections.abc import Callable

from contract_gate.errors import ContractViolation

from .base import CheckContext, CheckResult, Violation
from .breaking import check_breaking
from .parity import check_parity
from .structure import check_db, check_fe, check_openapi

logger = logging.getLogger(__name__)

# Order used by run_all.
CHECKS: dict[str, Callable[[CheckContext], list[str]]] = {
    "validate:openapi": check_openapi,
    "validate:fe": check_fe,
    "validate:db": check_db,
    "check:parity": check_parity,
    "check:breaking": check_breaking,
}


def run_check(name: str, context: CheckContext) -> CheckResult:
    """Run one pass and capture its first violation, if any."""
    check = CHECKS[name]
    logger.debug("Running %s over %s", name, context.modules.root)
    try:
        modules = check(context)
    except ContractViolation as e:
        logger.debug("%s failed: %s", name, e)
        return CheckResult(name=name, violation=Violation.from_exception(e))
    return CheckResult(name=name, modules=modules)


def run_all(context: CheckContext, on_result: Callable[[CheckResult], None] | None = None) -> list[CheckResult]:
    """Run every pass in order, stopping after the first failure."""
    results = []
    for name in CHECKS:
        result = run_check(name, context)
        results.append(result)
        if on_result is not None:
            on_result(result)
        if not result.passed:
            break
    return results
