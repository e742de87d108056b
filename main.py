#!/usr/bin/env python3
"""
Main loop for the conditions ticker: rotates station-condition panels and
live scores on a one-line display strip, optionally writing each frame to
``FRAME_OUTPUT_PATH``.
"""
import logging
import os
import signal
import threading

from PIL import Image

from config import (
    FRAME_OUTPUT_PATH,
    LOG_LEVEL,
    SPORTS_WARMUP_SECONDS,
    TICK_SECONDS,
    WEATHER_SNAPSHOT_PATH,
)
from conditions import FileSnapshotSource
from render import ImageSink
from rotation import DisplayGate, DisplayStatus
from ticker import ConditionsTicker
from timeline import Timeline

CONDITIONS_DISPLAY_ID = "conditions"

_shutdown_event = threading.Event()


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _save_frame(img: Image.Image) -> None:
    tmp_path = f"{FRAME_OUTPUT_PATH}.tmp"
    try:
        img.save(tmp_path, format="PNG")
        os.replace(tmp_path, FRAME_OUTPUT_PATH)
    except OSError as exc:
        logging.warning("⚠️ Frame save failed: %s", exc)


def request_shutdown(reason: str) -> None:
    if _shutdown_event.is_set():
        return
    logging.info("✋ Shutdown requested (%s).", reason)
    _shutdown_event.set()


def _handle_sigterm(signum, frame):
    request_shutdown("SIGTERM")


def build_ticker(timeline: Timeline) -> ConditionsTicker:
    sink = ImageSink(output=_save_frame if FRAME_OUTPUT_PATH else None)
    gate = DisplayGate(DisplayStatus(eligible=True, id=CONDITIONS_DISPLAY_ID))
    ticker = ConditionsTicker(
        gate=gate,
        snapshot_source=FileSnapshotSource(WEATHER_SNAPSHOT_PATH),
        sink=sink,
        timeline=timeline,
    )
    timeline.call_every(TICK_SECONDS, lambda: sink.advance(TICK_SECONDS))
    return ticker


def main() -> None:
    _configure_logging()
    logging.info("🖥️  Starting conditions ticker…")

    timeline = Timeline()
    ticker = build_ticker(timeline)
    signal.signal(signal.SIGTERM, _handle_sigterm)

    ticker.start()
    timeline.call_later(SPORTS_WARMUP_SECONDS, ticker.start_sports_updates)

    try:
        timeline.run_forever(_shutdown_event)
    except KeyboardInterrupt:
        request_shutdown("CTRL-C")
    finally:
        ticker.shutdown()
        logging.info("👋 Shutdown cleanup finished.")


if __name__ == "__main__":
    main()
