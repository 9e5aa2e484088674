"""
Command-line interface.

Summarizes a haptic pattern or a .wav file and optionally writes the
sampled data as CSV.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from hapticscope.config import HapticConfig
from hapticscope.core.audio import waveform_filename
from hapticscope.defaults import DEFAULT_HAPTIC_PATTERN
from hapticscope.errors import ConfigError
from hapticscope.io.exporter import CsvExporter
from hapticscope.pipeline import AudioPipeline, HapticPipeline


def _print_metrics(title: str, metrics: dict) -> None:
    print(title)
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"  {key:<16} {value:.4f}")
        else:
            print(f"  {key:<16} {value}")


def run_pattern(args: argparse.Namespace) -> int:
    """Handle ``hapticscope pattern``."""
    if args.pattern is None:
        text = DEFAULT_HAPTIC_PATTERN
    else:
        if not args.pattern.exists():
            print(f"Error: Pattern file not found: {args.pattern}", file=sys.stderr)
            return 1
        text = args.pattern.read_text(encoding="utf-8")

    try:
        config = HapticConfig(sample_count=args.samples)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    result = HapticPipeline(config).process(text)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if result.summary is None:
        print("No curve data")
    else:
        _print_metrics("Curves", result.summary.to_dict())

    if args.events:
        for name, summary in result.event_summaries().items():
            if summary is not None:
                _print_metrics(f"Events: {name}", summary.to_dict())

    if args.output is not None:
        exporter = CsvExporter(config)
        path = exporter.export_csv(result.samples, args.output)
        print(f"Wrote {path}")
        if args.events and result.events is not None:
            for name, series in result.events.streams.items():
                event_path = path.with_name(f"{path.stem}_{name}{path.suffix}")
                exporter.export_csv(series, event_path)
                print(f"Wrote {event_path}")
    return 0


def run_audio(args: argparse.Namespace) -> int:
    """Handle ``hapticscope audio``."""
    if not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        return 1

    pipeline = AudioPipeline()
    result = asyncio.run(pipeline.process_upload(args.audio.name, args.audio.read_bytes()))
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    _print_metrics(f"Audio: {args.audio.name}", result.summary.to_dict())

    output = args.output
    if output is None:
        output = args.audio.with_name(waveform_filename(args.audio.name))
    path = CsvExporter().export_audio_csv(result.waveform, output)
    print(f"Wrote {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hapticscope",
        description="Sample and summarize haptic patterns and audio waveforms",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    pattern = sub.add_parser("pattern", help="Summarize an AHAP-like pattern")
    pattern.add_argument(
        "pattern",
        type=Path,
        nargs="?",
        default=None,
        help="Pattern JSON file (default: built-in sample)",
    )
    pattern.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the curve samples to this CSV file",
    )
    pattern.add_argument(
        "-n", "--samples",
        type=int,
        default=600,
        help="Number of sampling intervals (default: 600)",
    )
    pattern.add_argument(
        "-e", "--events",
        action="store_true",
        help="Also summarize (and export) each event-type stream",
    )
    pattern.set_defaults(func=run_pattern)

    audio = sub.add_parser("audio", help="Summarize a .wav file")
    audio.add_argument(
        "audio",
        type=Path,
        help="Input .wav file",
    )
    audio.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output CSV file (default: <audio>_waveform.csv)",
    )
    audio.set_defaults(func=run_audio)

    return parser


def main(argv=None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
