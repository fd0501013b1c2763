# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: InvoiceTextExtractor
# -----------------------------------------------------------------------------
import io
import time
from pathlib import Path
from typing import Callable, List, Optional

import fitz
import pytesseract
from PIL import Image, UnidentifiedImageError

from utility.exceptions import TextExtractionError
from utility.logging_utils import get_class_logger

ProgressCallback = Callable[[int], None]

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp"}
PDF_SUFFIXES = {".pdf"}


class _ProgressReporter:
    """Clamps to [0, 100] and never reports a value lower than the last one."""

    def __init__(self, callback: Optional[ProgressCallback]):
        self.callback = callback
        self.last = -1

    def __call__(self, value: float) -> None:
        if self.callback is None:
            return
        pct = max(0, min(100, int(round(value))))
        if pct < self.last:
            return
        self.last = pct
        self.callback(pct)


class InvoiceTextExtractor:
    """
    Image/PDF bytes -> text.

    Images go through Tesseract (pytesseract). PDFs use the embedded text
    layer via PyMuPDF and fall back to OCR of the rendered page when a
    page has no text layer.
    """

    def __init__(
            self,
            *,
            lang: str = "eng",
            timeout_seconds: float = 0,
            pdf_render_dpi: int = 200,
            logger=None,
    ):
        self.lang = lang
        self.timeout_seconds = timeout_seconds
        self.pdf_render_dpi = pdf_render_dpi
        self.logger = logger or get_class_logger(self.__class__)

    @staticmethod
    def is_supported(filename: str) -> bool:
        suffix = Path(filename or "").suffix.lower()
        return suffix in IMAGE_SUFFIXES or suffix in PDF_SUFFIXES

    def tesseract_available(self) -> bool:
        try:
            pytesseract.get_tesseract_version()
            return True
        except Exception as e:
            self.logger.warning("Tesseract not available: %s", e)
            return False

    def extract(
            self,
            data: bytes,
            *,
            filename: str = "",
            on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        if not data:
            raise TextExtractionError(filename, "empty file")

        report = _ProgressReporter(on_progress)
        report(0)
        start = time.time()
        # one OCR budget for the whole file, shared by every page
        deadline = time.monotonic() + self.timeout_seconds if self.timeout_seconds > 0 else None

        if Path(filename or "").suffix.lower() in PDF_SUFFIXES:
            text = self._extract_pdf(data, filename=filename, report=report, deadline=deadline)
        else:
            text = self._extract_image(data, filename=filename, deadline=deadline)

        report(100)
        elapsed = (time.time() - start) * 1000.0
        self.logger.info("Extracted %d chars from '%s' (%.1f ms)", len(text), filename, elapsed)
        return text

    @staticmethod
    def _remaining(deadline: Optional[float], *, filename: str) -> float:
        """Seconds left before `deadline`; 0 means no limit."""
        if deadline is None:
            return 0
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TextExtractionError(filename, "OCR timed out")
        return remaining

    def _ocr(self, image: Image.Image, *, filename: str, deadline: Optional[float] = None) -> str:
        timeout = self._remaining(deadline, filename=filename)
        try:
            text = pytesseract.image_to_string(image, lang=self.lang, timeout=timeout)
        except pytesseract.TesseractNotFoundError as e:
            raise TextExtractionError(filename, "tesseract binary not found") from e
        except pytesseract.TesseractError as e:
            raise TextExtractionError(filename, f"OCR failed: {e}") from e
        except RuntimeError as e:
            # plain RuntimeError is pytesseract's timeout signal
            raise TextExtractionError(filename, f"OCR timed out: {e}") from e
        return (text or "").strip()

    def _extract_image(self, data: bytes, *, filename: str, deadline: Optional[float] = None) -> str:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return self._ocr(img, filename=filename, deadline=deadline)
        except (UnidentifiedImageError, OSError) as e:
            raise TextExtractionError(filename, f"unreadable image: {e}") from e

    def _extract_pdf(
            self,
            data: bytes,
            *,
            filename: str,
            report: _ProgressReporter,
            deadline: Optional[float] = None,
    ) -> str:
        page_texts: List[str] = []
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                total = len(doc)
                for i, page in enumerate(doc, start=1):
                    text = (page.get_text("text") or "").strip()
                    if not text:
                        pix = page.get_pixmap(dpi=self.pdf_render_dpi)
                        with Image.open(io.BytesIO(pix.tobytes("png"))) as img:
                            text = self._ocr(img, filename=filename, deadline=deadline)
                    page_texts.append(text)
                    report(i * 100 / max(total, 1))
        except TextExtractionError:
            raise
        except Exception as e:
            raise TextExtractionError(filename, f"unreadable PDF: {e}") from e

        return "\n".join(t for t in page_texts if t).strip()
