"""CLI entry point for aumai-reputation."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from aumai_reputation.core import ReputationCalculator
from aumai_reputation.graph import build_attestation_graph, find_trust_paths
from aumai_reputation.models import (
    DiscountMethod,
    ReputationOptions,
    ReputationResult,
    ReputationSummary,
    TrustCategory,
)
from aumai_reputation.snapshot import AttestationSnapshot
from aumai_reputation.summary import summarize_reputation


@click.group()
@click.version_option(package_name="aumai-reputation")
def main() -> None:
    """AumAI Reputation — EBSL trust scores over a web of attestations.

    Use 'aumai-reputation --help' to see available sub-commands.
    """


# ---------------------------------------------------------------------------
# score
# ---------------------------------------------------------------------------


@main.command("score")
@click.option(
    "--attestations",
    "attestations_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="JSON file with the attestation snapshot.",
)
@click.option("--target", required=True, help="Participant to score.")
@click.option(
    "--observer",
    default=None,
    help="Participant whose point of view personalizes the score.",
)
@click.option(
    "--options",
    "options_file",
    default=None,
    type=click.Path(exists=False, file_okay=True, dir_okay=False),
    help="JSON file with ReputationOptions. Uses defaults if absent.",
)
@click.option(
    "--discount-method",
    "discount_method",
    type=click.Choice([m.value for m in DiscountMethod]),
    default=None,
    help="Discount operator for transitive paths.",
)
@click.option("--max-path-depth", "max_path_depth", type=int, default=None)
@click.option("--max-paths", "max_paths", type=int, default=None)
@click.option("--theta", type=float, default=None, help="EBSL discount threshold.")
@click.option("--min-trust-level", "min_trust_level", type=int, default=None)
@click.option(
    "--all-records",
    is_flag=True,
    default=False,
    help="Use every record instead of the latest per attester/subject pair.",
)
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
def score_command(
    attestations_file: str,
    target: str,
    observer: str | None,
    options_file: str | None,
    discount_method: str | None,
    max_path_depth: int | None,
    max_paths: int | None,
    theta: float | None,
    min_trust_level: int | None,
    all_records: bool,
    output_format: str,
) -> None:
    """Compute the reputation of TARGET from an attestation snapshot.

    The snapshot is a JSON list of attestation records:

    \b
      [{"attester": "0xA", "subject": "0xB", "trustLevel": 90,
        "timestamp": 1700000000, "isActive": true}, ...]

    Command-line flags override values read from --options.
    """
    snapshot = _load_snapshot(attestations_file)
    if not all_records:
        snapshot = snapshot.latest()

    overrides: dict[str, Any] = {
        "discount_method": discount_method,
        "max_path_depth": max_path_depth,
        "max_paths": max_paths,
        "theta": theta,
        "min_trust_level": min_trust_level,
    }
    options = _apply_overrides(_load_options(options_file), overrides)

    result = ReputationCalculator(options).calculate_from_source(
        snapshot, target, observer
    )
    summary = summarize_reputation(result)

    if output_format == "json":
        payload = {
            "target": target,
            "observer": observer,
            "result": result.model_dump(mode="json"),
            "summary": summary.model_dump(mode="json"),
        }
        click.echo(json.dumps(payload, indent=2, default=str))
        return

    _print_reputation_report(target, observer, result, summary)


# ---------------------------------------------------------------------------
# paths
# ---------------------------------------------------------------------------


@main.command("paths")
@click.option(
    "--attestations",
    "attestations_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="JSON file with the attestation snapshot.",
)
@click.option("--source", required=True, help="Participant the search starts from.")
@click.option("--target", required=True, help="Participant to reach.")
@click.option("--max-depth", "max_depth", type=int, default=3, show_default=True)
def paths_command(
    attestations_file: str, source: str, target: str, max_depth: int
) -> None:
    """Show the trust path from SOURCE to TARGET, if one exists."""
    snapshot = _load_snapshot(attestations_file).latest()
    graph = build_attestation_graph(snapshot.fetch_all())
    paths = find_trust_paths(source, target, graph, max_depth=max_depth)

    if not paths:
        click.echo(
            click.style(
                f"No trust path from {source} to {target} within depth {max_depth}.",
                fg="yellow",
            )
        )
        return

    for path in paths:
        hops = []
        for attester, subject in zip(path, path[1:]):
            attestation = graph.find_active(attester, subject)
            level = attestation.trust_level if attestation is not None else "?"
            hops.append(f"--{level}--> {subject}")
        click.echo(f"{path[0]} " + " ".join(hops))


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


@main.command("report")
@click.option(
    "--input",
    "input_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="ReputationResult JSON file (or the output of 'score --output json').",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    show_default=True,
    help="Output format for the report.",
)
def report_command(input_file: str, output_format: str) -> None:
    """Summarize a saved reputation result."""
    try:
        raw: Any = json.loads(Path(input_file).read_text(encoding="utf-8"))
        if isinstance(raw, dict) and "result" in raw:
            raw = raw["result"]
        result = ReputationResult.model_validate(raw)
    except Exception as exc:
        click.echo(click.style(f"error loading reputation result: {exc}", fg="red"), err=True)
        sys.exit(1)

    summary = summarize_reputation(result)
    if output_format == "json":
        click.echo(json.dumps(summary.model_dump(mode="json"), indent=2))
    else:
        _print_summary(summary)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _load_snapshot(attestations_file: str) -> AttestationSnapshot:
    """Load the attestation snapshot, exiting with status 1 on bad input."""
    try:
        return AttestationSnapshot.from_json_file(attestations_file)
    except Exception as exc:
        click.echo(click.style(f"error loading attestations: {exc}", fg="red"), err=True)
        sys.exit(1)


def _load_options(options_file: str | None) -> ReputationOptions:
    """Load ReputationOptions from a JSON file or return the defaults."""
    if options_file is None:
        return ReputationOptions()

    options_path = Path(options_file)
    if not options_path.exists():
        click.echo(
            click.style(
                f"options file '{options_file}' not found; using defaults",
                fg="yellow",
            ),
            err=True,
        )
        return ReputationOptions()

    try:
        data: Any = json.loads(options_path.read_text(encoding="utf-8"))
        return ReputationOptions.model_validate(data)
    except Exception as exc:
        click.echo(
            click.style(f"invalid options file: {exc}; using defaults", fg="yellow"),
            err=True,
        )
        return ReputationOptions()


def _apply_overrides(
    options: ReputationOptions, overrides: dict[str, Any]
) -> ReputationOptions:
    """Return *options* with every non-None override applied and re-validated."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return options
    if "discount_method" in updates:
        updates["discount_method"] = DiscountMethod(updates["discount_method"])
    return ReputationOptions.model_validate({**options.model_dump(), **updates})


def _print_reputation_report(
    target: str,
    observer: str | None,
    result: ReputationResult,
    summary: ReputationSummary,
) -> None:
    """Print a formatted reputation report to stdout."""
    click.echo()
    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo(click.style("  AumAI Reputation — EBSL Trust Report", fg="cyan", bold=True))
    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo(f"  Target     : {target}")
    click.echo(f"  Observer   : {observer or '(none)'}")
    click.echo(f"  Method     : {result.method}")
    click.echo(click.style("-" * 62, fg="cyan"))
    _print_summary(summary, framed=False)

    if result.paths:
        click.echo(click.style("-" * 62, fg="cyan"))
        click.echo("  Trust Paths:")
        click.echo()
        for detail in result.paths:
            click.echo(f"  {' -> '.join(detail.path)}")
            click.echo(
                click.style(
                    f"      * expectation={detail.expectation:.4f}  "
                    f"b={detail.opinion.belief:.3f} d={detail.opinion.disbelief:.3f} "
                    f"u={detail.opinion.uncertainty:.3f}",
                    fg="bright_black",
                )
            )

    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo()


def _print_summary(summary: ReputationSummary, framed: bool = True) -> None:
    """Print the score, category and opinion percentages of *summary*."""
    if framed:
        click.echo()
        click.echo(click.style("=" * 62, fg="cyan"))
    color = _category_color(summary.category)
    click.echo(
        "  Score      : "
        + click.style(
            f"{summary.score:.1f}  ({summary.category.value})", fg=color, bold=True
        )
    )
    click.echo(f"  Confidence : {summary.confidence}%  {_score_bar(summary.confidence / 100)}")
    click.echo(
        f"  Opinion    : belief {summary.belief}%  disbelief {summary.disbelief}%  "
        f"uncertainty {summary.uncertainty}%"
    )
    click.echo(
        f"  Evidence   : {summary.direct_count} direct + "
        f"{summary.transitive_count} transitive = {summary.total_evidence}"
    )
    if framed:
        click.echo(click.style("=" * 62, fg="cyan"))
        click.echo()


def _score_bar(fraction: float, width: int = 20) -> str:
    """Return a simple ASCII bar representing *fraction* in [0, 1]."""
    filled = round(max(0.0, min(1.0, fraction)) * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _category_color(category: TrustCategory) -> str:
    """Return a click color name for a trust category."""
    return {
        TrustCategory.highly_trusted: "bright_green",
        TrustCategory.trusted: "green",
        TrustCategory.neutral: "yellow",
        TrustCategory.low_trust: "red",
        TrustCategory.untrusted: "bright_red",
    }[category]


if __name__ == "__main__":
    main()
