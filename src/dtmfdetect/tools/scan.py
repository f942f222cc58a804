#!/usr/bin/env python3
"""
Command-line DTMF scanner for sample recordings stored as CSV.

Each CSV column is one channel; an optional header row is skipped. The
recording is streamed through the analyzer block by block and every key
change (or, with ``--tones``, every complete tone) is printed::

    dtmf-scan --file call.csv --sample-rate 8000
    dtmf-scan --file stereo.csv --config detector.yaml --tones
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..analysis.analyzer import Analyzer
from ..analysis.tones import to_dtmf_tones
from ..config.detector_config import DetectorConfig, load_detector_config
from ..dataio.sample_loader import iter_frame_chunks, load_samples_csv
from ..dataio.samples import StreamSamples

logger = logging.getLogger(__name__)

READ_CHUNK_FRAMES = 4096


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect DTMF keys in a CSV sample recording")
    parser.add_argument(
        "--file",
        type=Path,
        required=True,
        help="CSV file with one column of float samples per channel",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML file describing DetectorConfig overrides",
    )
    parser.add_argument(
        "--sample-rate",
        type=int,
        help="Sampling rate of the recording in Hz (default: from config)",
    )
    parser.add_argument(
        "--block-size",
        type=int,
        help="Samples per channel analysed per block",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        help="Minimum tone response to count as present",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Compare raw instead of normalized Goertzel responses",
    )
    parser.add_argument(
        "--tones",
        action="store_true",
        help="Print complete tones (start + duration) instead of changes",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_config(args: argparse.Namespace) -> DetectorConfig:
    cfg = load_detector_config(args.config) if args.config else DetectorConfig.default()
    if args.sample_rate is not None:
        cfg = cfg.with_sample_rate(args.sample_rate)
    if args.block_size is not None:
        cfg = cfg.with_sample_block_size(args.block_size)
    if args.threshold is not None:
        cfg = cfg.with_threshold(args.threshold)
    if args.raw:
        cfg = cfg.with_normalize_response(False)
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = _resolve_config(args)
        data = load_samples_csv(args.file)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    channels = data.shape[1]
    logger.info(
        "Scanning %s: %d frame(s), %d channel(s) at %d Hz",
        args.file,
        data.shape[0],
        channels,
        cfg.sample_rate,
    )
    samples = StreamSamples(iter_frame_chunks(data, READ_CHUNK_FRAMES), channels, cfg.sample_rate)
    analyzer = Analyzer.create(samples, cfg)
    changes = list(analyzer.iter_changes())

    lines = [str(t) for t in to_dtmf_tones(changes)] if args.tones else [str(c) for c in changes]
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
