"""
Advisory checks on OCR extraction results.
"""

from typing import Optional

from .models import OCRResult, ValidationReport

DEFAULT_CONFIDENCE_THRESHOLD = 60.0
DEFAULT_MAX_PROCESSING_SECONDS = 30.0


def validate_extraction(result: Optional[OCRResult],
                        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
                        max_processing_seconds: float = DEFAULT_MAX_PROCESSING_SECONDS) -> ValidationReport:
    """
    Flag low OCR confidence, empty extractions and slow processing.

    Slow processing only adds a suggestion; it does not make the result
    invalid. The result itself is never modified.
    """
    if result is None:
        return ValidationReport(
            is_valid=False,
            issues=["No OCR results available"],
            suggestions=["Please process a receipt first"],
        )

    issues = []
    suggestions = []

    if result.confidence is not None and result.confidence < confidence_threshold:
        issues.append(f"Low OCR confidence: {result.confidence:.1f}%")
        suggestions.append("Try taking a clearer photo with better lighting")

    if not result.items:
        issues.append("No items were extracted from the receipt")
        suggestions.append("Check if the receipt image is clear and readable")
        suggestions.append("Try manually adding items if OCR fails")

    if result.processing_time > max_processing_seconds:
        suggestions.append("OCR took longer than expected, consider using a smaller image")

    return ValidationReport(is_valid=not issues, issues=issues, suggestions=suggestions)
