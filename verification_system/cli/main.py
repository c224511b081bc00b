"""Interactive CLI for the multi-agent verification core using Typer and Rich."""

import asyncio
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from verification_system import __version__
from verification_system.config.logging import configure_logging, get_logger
from verification_system.config.settings import Settings, settings
from verification_system.data_management.schemas import (
    OverallVerdict,
    VerificationOutcome,
)
from verification_system.exceptions import (
    AnalyzerFailure,
    DuplicateSession,
    InvalidRequest,
)
from verification_system.orchestration.orchestrator import create_orchestrator
from verification_system.screening import ContentScreener, RequestRateLimiter
from verification_system.utils.logging import configure_structured_logging

app = typer.Typer(
    help="Multi-agent content verification - run specialist analyzers over text",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")

rate_limiter = RequestRateLimiter()

VERDICT_STYLES = {
    OverallVerdict.DANGEROUS: "bold red",
    OverallVerdict.FALSE: "red",
    OverallVerdict.SUSPICIOUS: "yellow",
    OverallVerdict.UNVERIFIED: "cyan",
    OverallVerdict.VERIFIED: "green",
}


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override VERIFY_LOG_LEVEL for this run"),
) -> None:
    if log_level:
        configure_logging(log_level=log_level)
    configure_structured_logging(log_level=log_level)


@app.command()
def status() -> None:
    """
    Display system status and configuration.
    """
    logger.info("Displaying system status")

    table = Table(title="Verification System Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", "✓ Ready", python_version)

    orchestrator = create_orchestrator()
    table.add_row("Analyzers", "✓ Loaded", ", ".join(orchestrator.registry.ids()))

    timeout = f"{settings.analyzer_timeout_seconds}s" if settings.analyzer_timeout_seconds else "none"
    table.add_row(
        "Dispatch",
        "✓ Active",
        f"max {settings.max_selected_analyzers} analyzers, timeout {timeout}, latency x{settings.latency_scale}",
    )
    table.add_row(
        "Retention",
        "✓ Active",
        f"{settings.retention_seconds}s horizon, sweep every {settings.cleanup_interval_seconds}s",
    )
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    console.print(table)


@app.command()
def agents() -> None:
    """List the configured analyzers and their trigger keywords."""
    orchestrator = create_orchestrator()

    table = Table(title="Verification Agents", header_style="bold magenta")
    table.add_column("Id", style="cyan")
    table.add_column("Agent")
    table.add_column("Latency", justify="right")
    table.add_column("Keywords", style="dim")

    for descriptor in orchestrator.list_analyzers():
        table.add_row(
            descriptor.id,
            f"{descriptor.icon} {descriptor.display_name}",
            f"{descriptor.simulated_latency:.1f}s",
            ", ".join(descriptor.trigger_keywords),
        )

    console.print(table)


@app.command()
def scenarios() -> None:
    """List the canned demo scenarios."""
    orchestrator = create_orchestrator()

    for scenario in orchestrator.list_scenarios():
        console.print(Panel(
            f"{scenario.content}\n\n[dim]Expected: {scenario.expected_result.value} "
            f"({scenario.confidence:.0f}%) - {scenario.explanation}[/dim]",
            title=f"{scenario.title} [dim]({scenario.id})[/dim]",
            border_style="blue",
        ))


@app.command()
def verify(
    text: str = typer.Argument(..., help="Content to verify"),
    requester: str = typer.Option("cli", help="Requester id recorded on the session"),
    fast: bool = typer.Option(False, "--fast", help="Skip simulated analyzer latency"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible confidence values"),
) -> None:
    """
    Screen and verify content, then print every analyzer's verdict.
    """
    screener = ContentScreener()
    if not screener.validate_content(text):
        console.print("[red]✗[/red] Content failed validation (empty, too long or unsafe)")
        raise typer.Exit(2)

    if not rate_limiter.allow(requester):
        console.print(
            f"[yellow]⚠[/yellow] Too many requests from {requester}, "
            f"try again in {rate_limiter.window_seconds:.0f}s"
        )
        raise typer.Exit(1)

    overrides = {}
    if fast:
        overrides["latency_scale"] = 0.0
    if seed is not None:
        overrides["random_seed"] = seed
    cfg = settings.model_copy(update=overrides) if overrides else settings

    orchestrator = create_orchestrator(cfg)
    content = screener.prepare_content(text)

    try:
        with console.status("Running verification agents..."):
            outcome = asyncio.run(orchestrator.verify(content, requester))
    except InvalidRequest as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(2)
    except DuplicateSession:
        console.print("[yellow]⚠[/yellow] Request already in progress")
        raise typer.Exit(1)
    except AnalyzerFailure as e:
        logger.error(f"Verification failed: {e.message}")
        console.print("[red]✗[/red] Verification failed, please try again")
        raise typer.Exit(1)

    _render_outcome(outcome)


@app.command()
def screen(text: str = typer.Argument(..., help="Content to screen")) -> None:
    """Run only the rule-based screening (validation, risk level, flags)."""
    screener = ContentScreener()
    report = screener.generate_report(text)

    risk = report.risk_level.value if report.risk_level else "UNKNOWN"
    valid = "[green]valid[/green]" if report.is_valid else "[red]rejected[/red]"
    console.print(f"Risk: [bold]{risk}[/bold] | {valid} | {report.content_length} chars")
    for flag in report.flags:
        console.print(f"  • {flag}")
    for recommendation in screener.recommendations_for(report):
        console.print(f"  {recommendation}")


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Multi-Agent Verification System[/bold]")
    console.print(f"Version: {__version__}")


def _render_outcome(outcome: VerificationOutcome) -> None:
    table = Table(title=f"Verification {outcome.verification_id}", header_style="bold magenta")
    table.add_column("Agent", style="cyan")
    table.add_column("Verdict")
    table.add_column("Confidence", justify="right")
    table.add_column("Evidence", style="dim")
    table.add_column("Time", justify="right")

    for result in outcome.analyzer_results:
        table.add_row(
            result.analyzer_id,
            result.verdict.value,
            f"{result.confidence:.0f}%",
            "; ".join(result.evidence),
            f"{result.elapsed_time:.2f}s",
        )
    console.print(table)

    overall = outcome.overall_result
    console.print(Panel(
        f"{overall.summary}\n\nConfidence: {overall.confidence}% | Risk: {overall.risk_level.value}"
        f" | {outcome.processing_time:.2f}s",
        title=f"Overall: {overall.verdict.value}",
        border_style=VERDICT_STYLES.get(overall.verdict, "white"),
    ))


if __name__ == "__main__":
    app()
