"""Simulated detector + renderer demo.

A producer thread feeds simulated detections into a shared TrackSet while
the main thread renders the overlay, like a camera callback and a GL thread
sharing one track set.
"""

from __future__ import annotations

import argparse
import json
import threading
import time
from pathlib import Path

import cv2
import numpy as np

from configs.settings import DEFAULT_CONFIG_PATH, load_config
from contracts.versioning import make_envelope
from detect.simulated import SimulatedDetectionSource
from log_config.logger import configure_file_logging, get_logger
from render.buffers import TriangleStripBuffers
from render.labels import LabelCollector
from render.preview import draw_overlay
from track.track_set import TrackSet

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Overlay simulated detection tracks.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--frames", type=int, default=120)
    parser.add_argument("--fps", type=float, default=30.0)
    parser.add_argument("--output", type=Path, default=None, help="Write an .avi of the overlay")
    parser.add_argument("--snapshot", type=Path, default=None, help="Write the last frame as an image")
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write rotating log files here")
    return parser.parse_args()


def produce(source: SimulatedDetectionSource, tracks: TrackSet, frames: int, fps: float, done: threading.Event) -> None:
    delay = 1.0 / fps if fps > 0 else 0.0
    try:
        for _ in range(frames):
            tracks.add_detections(source.next_frame(), source.width, source.height)
            if delay:
                time.sleep(delay)
    finally:
        done.set()


def main() -> None:
    args = parse_args()
    if args.log_dir is not None:
        configure_file_logging(args.log_dir)
    config = load_config(args.config)
    source = SimulatedDetectionSource(config.simulation)
    tracks = TrackSet.from_config(config)
    buffers = TriangleStripBuffers(tracks.max_vertices())

    width, height = source.width, source.height
    background = np.full((height, width, 3), 24, dtype=np.uint8)
    writer = None
    if args.output is not None:
        fourcc = cv2.VideoWriter_fourcc(*"MJPG")
        writer = cv2.VideoWriter(str(args.output), fourcc, args.fps or 30.0, (width, height))

    done = threading.Event()
    producer = threading.Thread(
        target=produce,
        args=(source, tracks, args.frames, args.fps, done),
        name="detections",
        daemon=True,
    )
    producer.start()

    rendered = 0
    frame = background
    try:
        while True:
            finished = done.is_set()
            tracks.generate_curves(buffers)
            labels = LabelCollector(config.render.char_step_x)
            tracks.generate_labels(labels, height)
            frame = draw_overlay(background, buffers, labels.entries)
            if writer is not None:
                writer.write(frame)
            rendered += 1
            if finished:
                break
            time.sleep(1.0 / args.fps if args.fps > 0 else 0.0)
    finally:
        producer.join()
        if writer is not None:
            writer.release()

    if args.snapshot is not None:
        cv2.imwrite(str(args.snapshot), frame)

    logger.info(f"Rendered {rendered} frames for {tracks.frame_index} detection frames")
    payload = {
        "frames": tracks.frame_index,
        "tracks": [s.to_dict() for s in tracks.snapshot()],
    }
    print(json.dumps(make_envelope(payload), indent=2))


if __name__ == "__main__":
    main()
