"""Package operators for executing installation and removal actions.

This module provides abstract and concrete implementations of package
operators for Homebrew (formulae, casks, taps) and npm.
"""

from stationctl.models.package import PackageKind
from stationctl.operators.base import Operator
from stationctl.operators.brew import CaskOperator, FormulaOperator, TapOperator
from stationctl.operators.npm import NpmOperator


def get_operators(dry_run: bool = False) -> dict[PackageKind, Operator]:
    """Build one operator per package kind.

    Args:
        dry_run: If True, operators only log what they would run.

    Returns:
        Mapping of package kind to its operator.
    """
    operators: list[Operator] = [
        FormulaOperator(dry_run=dry_run),
        CaskOperator(dry_run=dry_run),
        NpmOperator(dry_run=dry_run),
        TapOperator(dry_run=dry_run),
    ]
    return {op.kind: op for op in operators}


__all__ = [
    "CaskOperator",
    "FormulaOperator",
    "NpmOperator",
    "Operator",
    "TapOperator",
    "get_operators",
]
