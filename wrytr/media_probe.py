from __future__ import annotations

import atexit
import io
import logging
import os
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import List, Optional

import mutagen
import pygame
from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

logger = logging.getLogger(__name__)

_DECODER_READY = False
_DECODER_LOCK = threading.RLock()
_MPEG_SYNC_SCAN_BYTES = 64 * 1024
_PROBE_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wrytr-duration-probe")


def _shutdown_probe_executor() -> None:
    _PROBE_EXECUTOR.shutdown(wait=False, cancel_futures=True)


atexit.register(_shutdown_probe_executor)


def _ensure_decoder() -> None:
    global _DECODER_READY
    with _DECODER_LOCK:
        if _DECODER_READY and pygame.mixer.get_init():
            return
        if not pygame.mixer.get_init():
            original_driver = os.environ.get("SDL_AUDIODRIVER")
            init_errors: List[str] = []
            for driver in [original_driver, "dummy"]:
                try:
                    if driver:
                        os.environ["SDL_AUDIODRIVER"] = driver
                    elif "SDL_AUDIODRIVER" in os.environ:
                        del os.environ["SDL_AUDIODRIVER"]
                    pygame.mixer.init(frequency=44100, size=-16, channels=2)
                    break
                except pygame.error as exc:
                    init_errors.append(f"{driver or 'default'}: {exc}")
            if not pygame.mixer.get_init():
                raise pygame.error("Unable to initialize pygame mixer: " + " | ".join(init_errors))
        _DECODER_READY = True


def _find_mpeg_sync_offset(data: bytes) -> int:
    for idx in range(max(0, len(data) - 1)):
        if data[idx] == 0xFF and (data[idx + 1] & 0xE0) == 0xE0:
            return idx
    return -1


def _load_sound_with_fallback(file_path: str) -> "pygame.mixer.Sound":
    try:
        return pygame.mixer.Sound(file_path)
    except Exception as first_error:
        if not file_path.lower().endswith(".mp3"):
            raise
        with open(file_path, "rb") as fh:
            data = fh.read()
        offset = _find_mpeg_sync_offset(data[:_MPEG_SYNC_SCAN_BYTES])
        if offset <= 0:
            raise first_error
        logger.debug("Retrying %s from MPEG frame sync at byte %d", file_path, offset)
        return pygame.mixer.Sound(file=io.BytesIO(data[offset:]))


def read_header_duration(file_path: str) -> Optional[float]:
    """Return the length stored in the file headers, or ``None`` if mutagen cannot tell."""
    try:
        media = mutagen.File(file_path)
    except mutagen.MutagenError as exc:
        logger.debug("No readable header in %s: %s", file_path, exc)
        return None
    length = getattr(getattr(media, "info", None), "length", None)
    if not length or length <= 0:
        return None
    return float(length)


def probe_duration_seconds(file_path: str) -> int:
    length = read_header_duration(file_path)
    if length is not None:
        return int(length)
    # Full decode; only for formats whose headers carry no length.
    logger.debug("Decoding %s to measure its length", file_path)
    with _DECODER_LOCK:
        _ensure_decoder()
        sound = _load_sound_with_fallback(file_path)
        return max(0, int(float(sound.get_length())))


class DurationLookups:
    """Hands out generation tokens so only the newest lookup may resolve."""

    def __init__(self) -> None:
        self._generation = 0

    @property
    def current(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def invalidate(self) -> None:
        self._generation += 1

    def is_current(self, generation: int) -> bool:
        return int(generation) == self._generation


class DurationProbe(QObject):
    durationResolved = pyqtSignal(int)
    durationFailed = pyqtSignal(str)
    _lookupFinished = pyqtSignal(int, object, str)

    def __init__(self, executor: Optional[Executor] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._executor = executor or _PROBE_EXECUTOR
        self._lookups = DurationLookups()
        self._pending: Optional[Future] = None
        self._lookupFinished.connect(self._on_lookup_finished)

    @property
    def generation(self) -> int:
        return self._lookups.current

    def request(self, file_path: str) -> int:
        self.cancel()
        generation = self._lookups.begin()
        logger.debug("Duration lookup %d: %s", generation, file_path)
        self._pending = self._executor.submit(self._run_lookup, generation, str(file_path))
        return generation

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._lookups.invalidate()

    def _run_lookup(self, generation: int, file_path: str) -> None:
        try:
            seconds = probe_duration_seconds(file_path)
        except Exception as exc:
            self._lookupFinished.emit(generation, None, str(exc))
            return
        self._lookupFinished.emit(generation, seconds, "")

    @pyqtSlot(int, object, str)
    def _on_lookup_finished(self, generation: int, seconds: object, error: str) -> None:
        if not self._lookups.is_current(generation):
            logger.debug("Discarding stale duration lookup %d (current %d)", generation, self._lookups.current)
            return
        self._pending = None
        if seconds is None:
            logger.warning("Could not read audio duration: %s", error)
            self.durationFailed.emit(error)
            return
        self.durationResolved.emit(int(seconds))
