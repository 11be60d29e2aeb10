# scalp_analyzer/ocr/engine.py
from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import CancelledError, Future
from concurrent.futures import TimeoutError as FutureTimeout

import cv2
import numpy as np

from ..errors import OcrEngineError, OcrTimeoutError

logger = logging.getLogger("scalp_analyzer.ocr")

Reader = Callable[[np.ndarray], str]  # RGB image -> recognized text

_INSTALL_HINT = {
    "rapid": "pip install rapidocr-onnxruntime onnxruntime",
    "tesseract": "sudo apt-get install tesseract-ocr && pip install pytesseract",
    "paddle": "pip install paddleocr paddlepaddle",
}


# ---------- Backends ----------
def _rapid_reader() -> Reader:
    from rapidocr_onnxruntime import RapidOCR

    ocr = RapidOCR()

    def read(im_rgb: np.ndarray) -> str:
        result, _ = ocr(im_rgb)  # list of [box, text, score]
        if not result:
            return ""
        return "\n".join(t[1] for t in result).strip()

    return read


def _tesseract_reader() -> Reader:
    import pytesseract  # requires system tesseract

    def read(im_rgb: np.ndarray) -> str:
        return pytesseract.image_to_string(im_rgb, config="--psm 6").strip()

    return read


def _paddle_reader() -> Reader:
    from paddleocr import PaddleOCR

    ocr = PaddleOCR(use_angle_cls=True, lang="en", show_log=False)

    def read(im_rgb: np.ndarray) -> str:
        res = ocr.ocr(im_rgb, cls=True) or []
        lines = []
        for block in res:
            for _poly, (text, _conf) in block or []:
                if text:
                    lines.append(text)
        return "\n".join(lines).strip()

    return read


_BACKENDS: dict[str, Callable[[], Reader]] = {
    "rapid": _rapid_reader,
    "tesseract": _tesseract_reader,
    "paddle": _paddle_reader,
}


def build_reader(kind: str) -> Reader:
    try:
        factory = _BACKENDS[kind]
    except KeyError:
        raise OcrEngineError(
            f"Unknown OCR engine {kind!r}; choose one of {', '.join(_BACKENDS)}"
        ) from None
    try:
        return factory()
    except ImportError as e:
        raise OcrEngineError(
            f"OCR engine {kind!r} is not installed. Install it with:\n"
            f"  {_INSTALL_HINT[kind]}"
        ) from e


# ---------- Worker ----------
class _Worker:
    """One daemon thread draining a job queue in submission order.

    Daemon so a reader stuck inside the backend never blocks process exit.
    """

    def __init__(self):
        self._jobs: queue.SimpleQueue = queue.SimpleQueue()
        self._thread = threading.Thread(target=self._run, name="ocr", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                return
            future, fn, args = job
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn(*args))
            except BaseException as e:
                future.set_exception(e)

    def submit(self, fn, *args) -> Future:
        future: Future = Future()
        self._jobs.put((future, fn, args))
        return future

    def stop(self, wait: bool) -> None:
        """Cancel queued jobs and end the thread once its current job returns."""
        while True:
            try:
                job = self._jobs.get_nowait()
            except queue.Empty:
                break
            if job is not None:
                job[0].cancel()
        self._jobs.put(None)
        if wait:
            self._thread.join()


# ---------- Engine handle ----------
class OcrEngine:
    """
    Long-lived OCR handle shared by every chart run.

    Recognition goes through a single worker thread, so concurrent callers
    are queued rather than racing on the backend's internal state. Each wait
    is bounded by ``timeout`` seconds. A timed-out job cannot be interrupted,
    so its worker is abandoned and the next submit starts a fresh one
    (with a freshly loaded backend unless a reader was injected).

    Parameters
    ----------
    kind : str
        Backend name: "rapid", "tesseract" or "paddle".
    timeout : float
        Seconds :meth:`collect` waits for a result before giving up.
    reader : Callable[[np.ndarray], str] | None
        Pre-built reader taking an RGB array; bypasses backend loading.
    """

    def __init__(
        self,
        kind: str = "rapid",
        timeout: float = 30.0,
        reader: Reader | None = None,
    ):
        self.kind = kind
        self.timeout = timeout
        self._reader = reader
        self._owns_reader = reader is None
        self._worker: _Worker | None = None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._worker is not None

    def create(self) -> OcrEngine:
        """Load the backend and start the worker; no-op when already running."""
        with self._lock:
            if self._worker is not None:
                return self
            if self._reader is None:
                self._reader = build_reader(self.kind)
            self._worker = _Worker()
        logger.info("OCR engine ready (%s)", self.kind)
        return self

    def _detach(self) -> _Worker | None:
        with self._lock:
            worker, self._worker = self._worker, None
        return worker

    def shutdown(self) -> None:
        worker = self._detach()
        if worker is not None:
            worker.stop(wait=True)
            logger.info("OCR engine terminated")

    def __enter__(self) -> OcrEngine:
        return self.create()

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def _read(self, reader: Reader, im_bgr: np.ndarray) -> str:
        if im_bgr.size == 0:
            return ""
        im_rgb = cv2.cvtColor(im_bgr, cv2.COLOR_BGR2RGB)
        try:
            return reader(im_rgb)
        except Exception as e:
            raise OcrEngineError(f"OCR failed: {e}") from e

    def submit(self, im_bgr: np.ndarray) -> Future[str]:
        """Queue a BGR crop for recognition and return its pending result."""
        self.create()
        with self._lock:
            if self._worker is None:
                raise OcrEngineError("OCR engine was shut down")
            return self._worker.submit(self._read, self._reader, im_bgr)

    def collect(self, future: Future[str]) -> str:
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeout:
            future.cancel()
            with self._lock:
                worker, self._worker = self._worker, None
                if self._owns_reader:
                    # the stuck job keeps its backend; the next worker loads its own
                    self._reader = None
            if worker is not None:
                worker.stop(wait=False)
                logger.warning(
                    "OCR timed out after %gs; abandoning the worker", self.timeout
                )
            raise OcrTimeoutError(self.timeout) from None
        except CancelledError:
            raise OcrEngineError("OCR job was cancelled") from None

    def recognize(self, im_bgr: np.ndarray) -> str:
        return self.collect(self.submit(im_bgr))
