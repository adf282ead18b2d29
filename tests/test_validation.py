from receipt_splitter.core.models import OCRResult, ReceiptItem
from receipt_splitter.core.validation import validate_extraction


def result(confidence=90.0, items=None, processing_time=1.0):
    if items is None:
        items = [ReceiptItem(id="item-1", name="Pizza", price=18.5)]
    return OCRResult(text="Pizza $18.50", confidence=confidence, items=items,
                     processing_time=processing_time)


def test_good_result_is_valid():
    report = validate_extraction(result())
    assert report.is_valid
    assert report.issues == []
    assert report.suggestions == []


def test_low_confidence():
    report = validate_extraction(result(confidence=42.5))
    assert not report.is_valid
    assert report.issues == ["Low OCR confidence: 42.5%"]
    assert "better lighting" in report.suggestions[0]


def test_threshold_is_configurable():
    assert validate_extraction(result(confidence=70), confidence_threshold=80).is_valid is False
    assert validate_extraction(result(confidence=50), confidence_threshold=40).is_valid is True


def test_missing_confidence_is_not_flagged():
    assert validate_extraction(result(confidence=None)).is_valid


def test_no_items():
    report = validate_extraction(result(items=[]))
    assert not report.is_valid
    assert report.issues == ["No items were extracted from the receipt"]
    assert len(report.suggestions) == 2


def test_slow_processing_is_only_a_suggestion():
    report = validate_extraction(result(processing_time=45.0))
    assert report.is_valid
    assert report.issues == []
    assert report.suggestions == ["OCR took longer than expected, consider using a smaller image"]


def test_no_result():
    report = validate_extraction(None)
    assert not report.is_valid
    assert report.issues == ["No OCR results available"]


def test_result_is_not_modified():
    r = result(confidence=10, items=[])
    validate_extraction(r)
    assert r.items == []
    assert r.confidence == 10
