"""Shared Rich display functions for plans, results and snapshots.

Provides reusable table builders and summary printers used across CLI
commands (snapshot, clean, install, presets).
"""

from rich.table import Table

from stationctl.core.capture import ScanStep, StepStatus
from stationctl.core.installer import InstallReport
from stationctl.models.action import Action, ActionResult, create_remove_action
from stationctl.models.clean_result import CleanResult
from stationctl.models.package import PackageKind
from stationctl.models.snapshot import Snapshot
from stationctl.utils.formatting import console, print_success

_KIND_ORDER: tuple[PackageKind, ...] = (
    PackageKind.FORMULA,
    PackageKind.CASK,
    PackageKind.NPM,
    PackageKind.TAP,
)


def removal_actions(result: CleanResult) -> list[Action]:
    """Turn a diff's extra lists into remove actions, in execution order.

    Args:
        result: Diff result.

    Returns:
        One remove action per extra package.
    """
    return [
        create_remove_action(name, kind, reason="Not in desired state")
        for kind in _KIND_ORDER
        for name in result.extra(kind)
    ]


def create_actions_table(actions: list[Action], dry_run: bool = False) -> Table:
    """Create a Rich table displaying planned actions.

    Builds a formatted table with Action, Kind, Package, and Reason columns.
    Install actions are styled as added and remove actions as removed.

    Args:
        actions: List of actions to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for action display.
    """
    title = "Planned Actions (Dry Run)" if dry_run else "Planned Actions"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=8, justify="center")
    table.add_column("Kind", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Reason")

    for action in actions:
        if action.is_install:
            action_text = "[added]+install[/added]"
            pkg_style = "added"
        else:
            action_text = "[removed]-remove[/removed]"
            pkg_style = "removed"

        table.add_row(
            action_text,
            f"[{action.kind.value}]{action.kind.value}[/{action.kind.value}]",
            f"[{pkg_style}]{action.package}[/{pkg_style}]",
            f"[muted]{action.reason or ''}[/muted]",
        )

    return table


def create_results_table(results: list[ActionResult]) -> Table:
    """Create a Rich table displaying action results.

    Successful results show "OK" status; failed results show "FAIL" with
    the error message.

    Args:
        results: List of action results to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Action", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Message")

    for result in results:
        if result.success:
            status = "[success]OK[/success]"
            message = result.message or ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(
            status,
            result.action.action_type.value,
            result.action.package,
            f"[muted]{message}[/muted]",
        )

    return table


def print_clean_summary(result: CleanResult) -> None:
    """Print counts of extra packages per kind.

    Args:
        result: Diff result.
    """
    parts = [
        f"[{kind.value}]{len(result.extra(kind))} {kind.plural}[/{kind.value}]"
        for kind in _KIND_ORDER
        if result.extra(kind)
    ]
    if parts:
        console.print(f"\nSummary: {', '.join(parts)} ({result.total_extra} to remove)")


def print_results_summary(results: list[ActionResult]) -> None:
    """Print a summary of action results.

    Shows a success message when all actions succeed, or a count of
    succeeded/failed actions when there are failures.

    Args:
        results: List of action results.
    """
    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)

    if fail_count == 0:
        print_success(f"All {success_count} action(s) completed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )


def print_install_summary(report: InstallReport) -> None:
    """Print a summary of an install run.

    Args:
        report: Install report.
    """
    if report.planned:
        console.print(f"\n[info]{len(report.planned)} package(s) would be installed[/info]")
    if report.skipped:
        console.print(f"[muted]{len(report.skipped)} already installed, skipped[/muted]")
    if report.installed or report.failed:
        console.print(
            f"\n[success]{len(report.installed)} installed[/success], "
            f"[error]{len(report.failed)} failed[/error]"
        )


def print_scan_step(step: ScanStep) -> None:
    """Print one finished capture phase.

    Phases that are only starting are not printed.

    Args:
        step: Progress report from the capture.
    """
    position = f"[muted][{step.index + 1}/{step.total}][/muted]"
    if step.status == StepStatus.DONE:
        console.print(f"{position} [success]✓[/success] {step.name} [muted]({step.count})[/muted]")
    elif step.status == StepStatus.ERROR:
        console.print(f"{position} [error]✗[/error] {step.name} [warning]failed[/warning]")


def create_snapshot_table(snapshot: Snapshot) -> Table:
    """Create a Rich table summarizing a snapshot.

    Args:
        snapshot: Snapshot to summarize.

    Returns:
        Rich Table with one row per captured section.
    """
    table = Table(
        title=f"Snapshot of {snapshot.hostname or 'unknown host'}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Section")
    table.add_column("Count", justify="right")
    table.add_column("Details")

    packages = snapshot.packages
    table.add_row("[formula]Formulae[/formula]", str(len(packages.formulae)), "")
    table.add_row("[cask]Casks[/cask]", str(len(packages.casks)), "")
    table.add_row("[tap]Taps[/tap]", str(len(packages.taps)), "")
    table.add_row("[npm]npm[/npm]", str(len(packages.npm)), "")
    table.add_row("macOS preferences", str(len(snapshot.macos_prefs)), "")

    shell = snapshot.shell
    shell_details = shell.default or "-"
    if shell.oh_my_zsh:
        shell_details += f" (Oh My Zsh, theme {shell.theme or '-'})"
    table.add_row("Shell", str(len(shell.plugins)), f"[muted]{shell_details}[/muted]")

    git = snapshot.git
    git_details = f"{git.user_name} <{git.user_email}>" if git.user_name else "-"
    table.add_row("Git", "", f"[muted]{git_details}[/muted]")

    tools = ", ".join(f"{t.name} {t.version}".strip() for t in snapshot.dev_tools)
    table.add_row("Dev tools", str(len(snapshot.dev_tools)), f"[muted]{tools or '-'}[/muted]")

    return table


def print_match_summary(snapshot: Snapshot) -> None:
    """Print catalog coverage and the detected preset.

    Args:
        snapshot: Matched snapshot.
    """
    match = snapshot.catalog_match
    console.print(
        f"\nCatalog match: [info]{match.match_rate:.0%}[/info] "
        f"[muted]({len(match.matched)} known, {len(match.unmatched)} unknown)[/muted]"
    )
    if snapshot.matched_preset:
        console.print(f"Closest preset: [success]{snapshot.matched_preset}[/success]")
    else:
        console.print("[muted]No preset matches this setup closely.[/muted]")

    if snapshot.health.partial:
        console.print(
            f"[warning]Partial capture, failed: {', '.join(snapshot.health.failed_steps)}[/warning]"
        )
