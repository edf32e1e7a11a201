import pytest

from doctext import extract_text, validate_extraction_result
from doctext.api.exceptions import ExtractionExhaustedError, UnsupportedFormatError
from doctext.domain.value_objects import ExtractionResult, FormatCategory
from doctext.services.text_extractors import TextExtractorFactory
from doctext.services.text_extractors.base import BaseTextExtractor, ExtractionMethod
from doctext.utils import is_valid_text, normalize_text


def test_plain_text_end_to_end():
    result = extract_text(b"Hello\r\nworld\r\n\r\n\r\nEnd", "text/plain", "notes.txt")
    assert result == ExtractionResult(page_content="Hello\nworld\n\nEnd", file_type="text")


def test_empty_text_file_is_exhausted():
    with pytest.raises(ExtractionExhaustedError) as exc_info:
        extract_text(b"", "text/plain", "empty.txt")
    assert "text file is empty" in exc_info.value.reason.lower()


def test_pagination_only_text_is_exhausted():
    with pytest.raises(ExtractionExhaustedError):
        extract_text(b"-- 1 of 1 --", "text/plain", "cover.txt")


def test_image_is_rejected_before_any_extractor(monkeypatch):
    def fail(category):
        raise AssertionError("no extractor may be looked up for images")

    monkeypatch.setattr(TextExtractorFactory, "get_extractor", fail)
    with pytest.raises(UnsupportedFormatError) as exc_info:
        extract_text(b"\xff\xd8\xff\xe0", "image/jpeg", "photo.jpg")
    assert "OCR" in exc_info.value.reason
    assert exc_info.value.extension == "jpg"


def test_denied_extension_is_unsupported():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        extract_text(b"MZ\x90\x00", "application/octet-stream", "malware.exe")
    error = exc_info.value
    assert "'.exe'" in error.reason
    assert "pdf" in error.supported_extensions
    assert error.supported_extensions == sorted(error.supported_extensions)


def test_unknown_binary_without_extension_is_unsupported():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        extract_text(bytes(range(256)), "", "blob")
    assert "(none)" in exc_info.value.reason


def test_opendocument_buffer_is_unsupported(odt_bytes):
    with pytest.raises(UnsupportedFormatError) as exc_info:
        extract_text(odt_bytes, "application/vnd.oasis.opendocument.text", "report.odt")
    assert exc_info.value.extension == "odt"


def test_extensionless_text_is_extracted():
    result = extract_text(b"Meeting notes for the steering committee", "", "README")
    assert result.file_type == "text"


@pytest.mark.parametrize("fixture_name, mime_type, file_name, file_type", [
    ("text_pdf_bytes", "application/pdf", "report.pdf", "pdf"),
    ("docx_bytes", "", "report.docx", "docx"),
    ("docx_bytes", "application/msword", "report.doc", "docx"),
    ("xlsx_bytes", "", "figures.xlsx", "xlsx"),
    ("xlsx_bytes", "application/octet-stream", "download", "xlsx"),
])
def test_documents_end_to_end(request, fixture_name, mime_type, file_name, file_type):
    result = extract_text(request.getfixturevalue(fixture_name), mime_type, file_name)
    assert result.file_type == file_type
    assert is_valid_text(result.page_content)
    assert normalize_text(result.page_content) == result.page_content


def test_scanned_pdf_is_exhausted(blank_pdf_bytes):
    with pytest.raises(ExtractionExhaustedError) as exc_info:
        extract_text(blank_pdf_bytes, "application/pdf", "scan.pdf")
    assert exc_info.value.format_name == "PDF"
    assert exc_info.value.page_count == 1


def test_register_overrides_extractor(monkeypatch):
    class ShoutingExtractor(BaseTextExtractor):
        def __init__(self):
            super().__init__("text", "Shouting")

        def methods(self):
            return [ExtractionMethod("upper", lambda data: data.decode().upper())]

    monkeypatch.setattr(TextExtractorFactory, "_extractors", {})
    monkeypatch.setattr(TextExtractorFactory, "_initialized", False)
    TextExtractorFactory.register(FormatCategory.PLAIN_TEXT, ShoutingExtractor())

    result = extract_text(b"quiet words spoken softly", "text/plain", "a.txt")
    assert result.page_content == "QUIET WORDS SPOKEN SOFTLY"
    assert TextExtractorFactory.get_extractor(FormatCategory.PDF) is not None


def test_get_supported_extensions():
    extensions = TextExtractorFactory.get_supported_extensions()
    assert {"pdf", "docx", "doc", "xlsx", "xls", "txt", "md", "json", "csv"} <= set(extensions)
    assert "exe" not in extensions
    assert "jpg" not in extensions


def test_validate_extraction_result():
    validate_extraction_result(ExtractionResult("Minutes of the annual meeting", "text"))
    with pytest.raises(ExtractionExhaustedError) as exc_info:
        validate_extraction_result(ExtractionResult("-- 1 of 1 --", "pdf"))
    assert exc_info.value.reason == "Could not extract text from the file"
    with pytest.raises(ExtractionExhaustedError):
        validate_extraction_result(ExtractionResult("", "docx"))
