"""
OCR functionality for turning receipt images and PDFs into text.
"""

import time
from pathlib import Path
from typing import Optional, Tuple

from .models import OCRResult
from .parsers import extract_with_stats
from .utils import (IMAGE_EXTS, PDF_EXTS, TEXT_EXTS, OCR_LANGUAGE, OCR_CHAR_WHITELIST,
                    OCR_PAGESEG_MODE, OCR_CONTRAST)


class OCRError(RuntimeError):
    """Raised when a receipt file cannot be turned into text."""


def tesseract_config() -> str:
    """Tesseract options: block layout, kept spacing, receipt character whitelist."""
    return (f'--psm {OCR_PAGESEG_MODE} -c preserve_interword_spaces=1 '
            f'-c "tessedit_char_whitelist={OCR_CHAR_WHITELIST}"')


def preprocess_image(img):
    """Convert to grayscale and boost contrast before OCR."""
    from PIL import ImageEnhance, ImageOps

    img = ImageOps.grayscale(img)
    return ImageEnhance.Contrast(img).enhance(OCR_CONTRAST)


def mean_confidence(data: dict) -> Optional[float]:
    """Average word confidence from pytesseract image_to_data output (-1 entries ignored)."""
    confs = []
    for c in data.get("conf", []):
        try:
            value = float(c)
        except (TypeError, ValueError):
            continue
        if value >= 0:
            confs.append(value)
    if not confs:
        return None
    return sum(confs) / len(confs)


def ocr_image_to_text(img_path: Path, tesseract_cmd: Optional[str] = None) -> Tuple[str, Optional[float]]:
    """OCR an image file; returns (text, confidence 0-100)."""
    import pytesseract
    from PIL import Image

    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    with Image.open(img_path) as raw:
        img = preprocess_image(raw)
    config = tesseract_config()
    text = pytesseract.image_to_string(img, lang=OCR_LANGUAGE, config=config)
    data = pytesseract.image_to_data(img, lang=OCR_LANGUAGE, config=config,
                                     output_type=pytesseract.Output.DICT)
    return text, mean_confidence(data)


def pdf_to_text(pdf_path: Path) -> str:
    """Extract text from a searchable PDF using PyMuPDF."""
    import fitz

    with fitz.open(pdf_path.as_posix()) as doc:
        return "\n".join(page.get_text() for page in doc)


def run_ocr(path: Path, tesseract_cmd: Optional[str] = None, verbose: bool = False) -> OCRResult:
    """
    Read a receipt file and extract items from its text.

    Images go through Tesseract; PDFs and .txt files are read as text and
    reported with full confidence.

    Raises:
        OCRError: unsupported file type, missing file, or OCR engine failure
    """
    path = Path(path)
    if not path.exists():
        raise OCRError(f"Receipt file not found: {path}")

    start = time.monotonic()
    ext = path.suffix.lower()
    try:
        if ext in IMAGE_EXTS:
            text, confidence = ocr_image_to_text(path, tesseract_cmd=tesseract_cmd)
        elif ext in PDF_EXTS:
            text, confidence = pdf_to_text(path), 100.0
        elif ext in TEXT_EXTS:
            text, confidence = path.read_text(encoding="utf-8"), 100.0
        else:
            raise OCRError(f"Unsupported file type: {path}")
    except OCRError:
        raise
    except Exception as e:
        raise OCRError(f"OCR processing failed for {path.name}: {e}") from e

    items, rule_counts = extract_with_stats(text, verbose=verbose)
    elapsed = time.monotonic() - start

    if verbose:
        conf = f"{confidence:.1f}%" if confidence is not None else "n/a"
        print(f"  [DEBUG] OCR: {len(text.splitlines())} line(s), confidence {conf}, {elapsed:.2f}s")
        for rule_name, count in rule_counts.items():
            print(f"  [DEBUG] Rule '{rule_name}' matched {count} line(s)")

    return OCRResult(text=text, confidence=confidence, items=items,
                     processing_time=elapsed, source_file=path.name)
