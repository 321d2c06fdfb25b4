#!/usr/bin/env python3
"""
Tick Replay Tool - Feed a recorded tick file through the engine.

The CSV needs timestamp,bid,ask[,bid_volume] columns. Timestamps may be epoch
milliseconds or anything pandas can parse as a UTC datetime.

Usage:
    uv run python tools/replay.py data/eurusd_ticks.csv
    uv run python tools/replay.py data/eurusd_ticks.csv --profile swing-ema --journal
"""

import argparse
import sys
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Settings
from core.logging_utils import setup_logging
from core.models import Signal, Tick, TradeProposal
from core.profiles import apply_profile
from execution.sizing import MartingaleSizer
from logic.engine import TickBarEngine

console = Console()

REQUIRED_COLUMNS = ("timestamp", "bid", "ask")


def load_ticks(path: Path, limit: Optional[int] = None) -> pd.DataFrame:
    """Load and normalise a tick CSV."""
    df = pd.read_csv(path, nrows=limit, float_precision="round_trip")
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing columns: {', '.join(missing)}")

    if not pd.api.types.is_numeric_dtype(df["timestamp"]):
        stamps = pd.to_datetime(df["timestamp"], utc=True)
        epoch = pd.Timestamp("1970-01-01", tz="UTC")
        df["timestamp"] = (stamps - epoch) // pd.Timedelta(milliseconds=1)
    if "bid_volume" not in df.columns:
        df["bid_volume"] = 0

    df = df.dropna(subset=["bid", "ask"]).copy()
    df["bid_volume"] = df["bid_volume"].fillna(0)
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def iter_ticks(df: pd.DataFrame) -> Iterator[Tick]:
    for row in df.itertuples(index=False):
        yield Tick(
            timestamp=int(row.timestamp),
            bid=float(row.bid),
            ask=float(row.ask),
            bid_volume=int(row.bid_volume),
        )


def replay(df: pd.DataFrame, engine: TickBarEngine) -> list[TradeProposal]:
    """Push every tick through the engine and collect accepted proposals."""
    proposals = []
    for tick in iter_ticks(df):
        result = engine.on_tick(tick)
        if isinstance(result, TradeProposal):
            proposals.append(result)
        elif isinstance(result, Signal):
            proposals.append(TradeProposal(signal=result, stop_distance_pips=0.0, lot_size=0.0))
    return proposals


def render_signals(proposals: list[TradeProposal]) -> Table:
    table = Table(box=None, padding=(0, 1))
    table.add_column("Label", style="cyan")
    table.add_column("Side", width=5)
    table.add_column("Entry", justify="right")
    table.add_column("Stop", justify="right")
    table.add_column("TP", justify="right")
    table.add_column("Pips", justify="right")
    table.add_column("Lot", justify="right")

    for p in proposals:
        s = p.signal
        side_style = "green" if s.direction.is_long else "red"
        table.add_row(
            p.label or "-",
            f"[{side_style}]{s.direction.value.upper()}[/]",
            f"{s.entry_price:.5f}",
            f"{s.buffered_stop_price:.5f}",
            f"{s.take_profit_price:.5f}",
            f"{p.stop_distance_pips:.1f}",
            f"{p.lot_size:.3f}",
        )

    if not proposals:
        table.add_row("[dim]No signals[/]", "", "", "", "", "", "")
    return table


def render_rejections(stats: dict) -> Table:
    table = Table(box=None, padding=(0, 1))
    table.add_column("Reason", style="yellow")
    table.add_column("Count", justify="right")
    for reason, count in sorted(stats["rejections"].items(), key=lambda kv: -kv[1]):
        table.add_row(reason, str(count))
    return table


def build_config(args) -> Settings:
    config = Settings()
    if args.profile:
        apply_profile(args.profile, config)
    if args.instrument:
        config.instrument = args.instrument
    if args.pip_value:
        config.pip_value = args.pip_value
    if args.log_level:
        config.log_level = args.log_level
    return config


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay recorded ticks through the tick bar engine")
    parser.add_argument("path", type=Path, help="Tick CSV file")
    parser.add_argument("--profile", default="", help="Parameter profile to apply")
    parser.add_argument("--instrument", default="", help="Instrument name (default from settings)")
    parser.add_argument("--pip-value", type=float, default=0.0, help="Pip value override")
    parser.add_argument("--limit", type=int, default=None, help="Only replay the first N ticks")
    parser.add_argument("--journal", action="store_true", help="Write signals/rejections JSONL")
    parser.add_argument("--log-level", default="", help="Log level override (default from settings)")
    parser.add_argument("--log-file", action="store_true", help="Also write the log to LOGS_DIR/tickbar.log")
    args = parser.parse_args(argv)

    config = build_config(args)
    setup_logging(config.log_level, log_file=args.log_file, logs_dir=Path(config.logs_dir))
    df = load_ticks(args.path, args.limit)

    engine = TickBarEngine(config, sizer=MartingaleSizer.from_settings(config), journal=args.journal)
    proposals = replay(df, engine)
    stats = engine.get_stats()

    console.print(Panel(
        render_signals(proposals),
        title=f"[bold cyan]{config.instrument} signals ({len(df)} ticks, {stats['evaluations']} passes)[/]",
        border_style="cyan",
    ))
    console.print(Panel(render_rejections(stats), title="[bold yellow]No-signal reasons[/]", border_style="yellow"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
