from __future__ import annotations

import hashlib
import json
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from devil_roulette.app.services.logger import configure_logging, write_timeline
from devil_roulette.app.services.settings_store import SettingsStore
from devil_roulette.core.engine import AutopickPolicy, run_simulation
from devil_roulette.core.settings import AppSettings, resolve_seed

app = typer.Typer(add_completion=False, help="Play deterministic headless runs for balancing and testing.")
console = Console()


def _normalize_seed(raw_seed: str) -> int | str:
    try:
        return int(raw_seed)
    except ValueError:
        return raw_seed


def run_signature(report) -> str:
    payload = report.to_dict()
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()[:16]


@app.command()
def run(
    seed: Optional[str] = typer.Option(None, "--seed", help="Seed value (int or string). Defaults to the settings seed."),
    policy: Optional[AutopickPolicy] = typer.Option(None, "--policy", help="Player policy: aggressive|cautious|random."),
    settings_path: Path = typer.Option(Path("settings.json"), "--settings", help="Settings JSON file."),
    logs_dir: Optional[Path] = typer.Option(None, "--logs-dir", help="Write latest.log and gameplay.log here."),
    quiet: bool = typer.Option(False, "--quiet", help="Skip the timeline dump."),
) -> None:
    settings = SettingsStore(settings_path).load()
    config = AppSettings.model_validate(settings)
    chosen_seed = resolve_seed(settings, _normalize_seed(seed) if seed is not None else None)
    chosen_policy = policy or config.gameplay.autopick

    bundle = None
    if logs_dir is not None:
        bundle = configure_logging(
            logs_dir,
            level=config.logging.level,
            keep_archives=config.logging.keep_archives,
            console=False,
        )
        bundle.app.info("Simulating seed=%s policy=%s", chosen_seed, chosen_policy)

    try:
        report = run_simulation(chosen_seed, chosen_policy, max_steps=config.gameplay.max_steps)
    except RuntimeError as exc:
        if bundle is not None:
            bundle.app.exception("Simulation aborted.")
        console.print(f"[bold red]Simulation aborted:[/bold red] {exc}")
        raise typer.Exit(1) from exc

    if bundle is not None and config.logging.gameplay_log:
        write_timeline(bundle.gameplay, report.timeline)

    if not quiet:
        for entry in report.timeline:
            console.print(entry.format(), markup=False)

    summary = Table(title="Run Summary")
    summary.add_column("Field", style="cyan", no_wrap=True)
    summary.add_column("Value", style="white")
    summary.add_row("Seed", str(report.seed))
    summary.add_row("Policy", report.policy)
    summary.add_row("Result", "VICTORY" if report.won else "DEAD" if report.cause_of_death else "UNFINISHED")
    summary.add_row("Layer", str(report.final_layer))
    summary.add_row("HP", str(report.final_hp))
    summary.add_row("Chips", str(report.chips))
    summary.add_row("Battles", str(report.battles))
    summary.add_row("Relics", ", ".join(report.relics) or "-")
    summary.add_row("Cause of Death", report.cause_of_death or "-")
    summary.add_row("RNG Draws", str(report.rng_calls))
    console.print()
    console.print(summary)
    console.print(f"\n[bold green]Deterministic signature:[/bold green] {run_signature(report)}")


@app.command()
def sweep(
    start: int = typer.Option(1, "--start", help="First seed."),
    count: int = typer.Option(100, "--count", min=1, help="Number of consecutive seeds."),
    policy: AutopickPolicy = typer.Option("aggressive", "--policy", help="Player policy: aggressive|cautious|random."),
    show: int = typer.Option(10, "--show", min=0, help="How many winning seeds to list."),
) -> None:
    winners: list[tuple[int, int]] = []
    deaths_by_layer: Counter[int] = Counter()
    for seed in range(start, start + count):
        try:
            report = run_simulation(seed, policy)
        except RuntimeError as exc:
            console.print(f"[bold red]Sweep aborted at seed {seed}:[/bold red] {exc}")
            raise typer.Exit(1) from exc
        if report.won:
            winners.append((seed, report.final_hp))
        else:
            deaths_by_layer[report.final_layer] += 1

    table = Table(title=f"Seed Sweep {start}..{start + count - 1} ({policy})")
    table.add_column("Layer", style="cyan", justify="right")
    table.add_column("Deaths", style="red", justify="right")
    for layer, deaths in sorted(deaths_by_layer.items(), reverse=True):
        table.add_row(str(layer), str(deaths))
    console.print(table)
    console.print(f"[bold green]Winners:[/bold green] {len(winners)}/{count}")
    for seed, hp in winners[:show]:
        console.print(f"  seed {seed} -> won with {hp} HP")


if __name__ == "__main__":
    app()
