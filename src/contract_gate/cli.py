"""CLI entry point for contract-gate."""

import logging
from pathlib import Path

import click
from click.core import ParameterSource

from contract_gate.checks.base import CheckContext, CheckResult
from contract_gate.checks.runner import run_all, run_check
from contract_gate.config import load_settings


def _explicit(ctx: click.Context, name: str, value):
    """Return the option value only when given on the command line, else None."""
    if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
        return value
    return None


def _report(result: CheckResult) -> None:
    if result.passed:
        click.echo(result.summary())
    else:
        click.echo(result.summary(), err=True)


def _run_single(ctx: click.Context, name: str) -> None:
    result = run_check(name, ctx.obj)
    _report(result)
    if not result.passed:
        ctx.exit(1)


@click.group()
@click.option("--modules-root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory with one sub-directory per module bundle.")
@click.option("--baseline-root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory with accepted baseline openapi.json snapshots.")
@click.option("--normalize-path-params/--no-normalize-path-params", default=False, help="Treat ':id' path segments as '{id}' when comparing endpoints.")
@click.option("-v", "--verbose", is_flag=True, help="Log each module as it is checked.")
@click.pass_context
def main(ctx: click.Context, modules_root: Path | None, baseline_root: Path | None, normalize_path_params: bool, verbose: bool):
    """Contract gate — verify module contract bundles before they ship."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(
        modules_root=modules_root,
        baseline_root=baseline_root,
        normalize_path_params=_explicit(ctx, "normalize_path_params", normalize_path_params),
    )
    ctx.obj = CheckContext(settings)


@main.command("validate-openapi")
@click.pass_context
def validate_openapi(ctx: click.Context):
    """Check every openapi.json for version, /api/ paths and operation objects."""
    _run_single(ctx, "validate:openapi")


@main.command("validate-fe")
@click.pass_context
def validate_fe(ctx: click.Context):
    """Check every fe_details.json and its zod_patch.json for required structure."""
    _run_single(ctx, "validate:fe")


@main.command("validate-db")
@click.pass_context
def validate_db(ctx: click.Context):
    """Check that every prisma_contract.json field traces back to a source."""
    _run_single(ctx, "validate:db")


@main.command("check-parity")
@click.pass_context
def check_parity(ctx: click.Context):
    """Check front-end endpoints and schema refs against the backend contract."""
    _run_single(ctx, "check:parity")


@main.command("check-breaking")
@click.pass_context
def check_breaking(ctx: click.Context):
    """Check that no baseline endpoint was removed."""
    _run_single(ctx, "check:breaking")


@main.command("all")
@click.pass_context
def run_all_checks(ctx: click.Context):
    """Run every check in order, stopping at the first failure."""
    results = run_all(ctx.obj, on_result=_report)
    if not results[-1].passed:
        ctx.exit(1)
