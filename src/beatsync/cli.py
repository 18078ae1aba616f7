"""
Command line interface.

Prints the beat grid of an audio file, optionally a snapshot at a playback
position, or writes a per-frame JSON manifest for a render job.

Usage:
    beatsync song.mp3
    beatsync song.mp3 --at 12.5 --bands detailed
    beatsync song.mp3 --fps 30 -o song_manifest.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from beatsync.config import BAND_PRESETS, settings
from beatsync.core.analyzer import AudioAnalyzer
from beatsync.core.snapshot import suggest_effects
from beatsync.core.tempo import analyze_regularity, guess_genre
from beatsync.io.exporter import AnalysisExporter
from beatsync.io.loader import DecodeError, load_waveform


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Detect tempo, beats and bars in an audio file"
    )

    parser.add_argument(
        "audio",
        type=Path,
        help="Input audio file (wav, mp3, flac)",
    )

    parser.add_argument(
        "--at",
        type=float,
        default=None,
        help="Also print a frequency snapshot at this time in seconds",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write a per-frame JSON manifest to this file",
    )

    parser.add_argument(
        "-f", "--fps",
        type=int,
        default=30,
        help="Manifest frames per second (default: 30)",
    )

    parser.add_argument(
        "--bands",
        choices=sorted(BAND_PRESETS),
        default=None,
        help="Band preset for snapshots (default: configured bands)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log analysis steps",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        sys.exit(1)

    try:
        waveform = load_waveform(args.audio)
    except DecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    bands = BAND_PRESETS[args.bands] if args.bands else None
    analyzer = AudioAnalyzer(settings=settings, bands=bands)
    analysis = analyzer.detect_bpm(waveform)
    exporter = AnalysisExporter(analyzer=analyzer)

    report = exporter.bpm_to_dict(analysis)
    report["regularity"] = analyze_regularity(analysis.beat_times).regularity
    report["genre_hint"] = guess_genre(analysis.bpm)

    if args.at is not None:
        snapshot = analyzer.analyze_frequencies(waveform, args.at)
        report["snapshot"] = exporter.snapshot_to_dict(snapshot)
        report["effect_suggestions"] = suggest_effects(snapshot.frequency_bands)

    if args.output is not None:
        path = exporter.export_json(waveform, args.output, fps=args.fps, analysis=analysis)
        report["manifest"] = str(path)

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
