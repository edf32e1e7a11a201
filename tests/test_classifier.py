import pytest

from doctext.domain.value_objects import DetectedFormat, FormatCategory
from doctext.services.text_extractors import classifier
from doctext.services.text_extractors.classifier import (
    MIME_DOCX,
    MIME_XLSX,
    OLE_SIGNATURE,
    classify,
    collect_signals,
    get_extension,
    looks_like_text,
    sniff_format,
)

OLE_BUFFER = OLE_SIGNATURE + b"\x00" * 504


@pytest.mark.parametrize("file_name, expected", [
    ("report.PDF", "pdf"),
    ("archive.tar.gz", "gz"),
    ("README", ""),
    ("trailing.", ""),
    (".bashrc", "bashrc"),
    ("", ""),
])
def test_get_extension(file_name, expected):
    assert get_extension(file_name) == expected


class TestSniffFormat:
    def test_pdf_magic(self):
        assert sniff_format(b"%PDF-1.7\n...") == DetectedFormat("application/pdf", "pdf")

    def test_png_magic(self):
        assert sniff_format(b"\x89PNG\r\n\x1a\n\x00\x00").extension == "png"

    def test_docx_container(self, docx_bytes):
        assert sniff_format(docx_bytes) == DetectedFormat(MIME_DOCX, "docx")

    def test_xlsx_container(self, xlsx_bytes):
        assert sniff_format(xlsx_bytes) == DetectedFormat(MIME_XLSX, "xlsx")

    def test_corrupt_zip_does_not_raise(self):
        assert sniff_format(b"PK\x03\x04 definitely not an archive").extension == "zip"

    def test_corrupt_ole_does_not_raise(self):
        detected = sniff_format(OLE_BUFFER)
        assert detected.mime_type == "application/x-ole-storage"

    def test_text_starting_with_bm_is_not_bitmap(self):
        assert sniff_format(b"BMW quarterly service notes").is_unknown

    def test_unknown(self):
        assert sniff_format(b"plain words").is_unknown
        assert sniff_format(b"").is_unknown


class TestLooksLikeText:
    def test_readable_text(self):
        assert looks_like_text("Résumé of the meeting\r\n\tNext steps".encode("latin-1"))

    def test_null_byte_rejects(self):
        assert not looks_like_text(b"mostly text\x00but binary")

    def test_control_bytes_reject(self):
        assert not looks_like_text(bytes(range(1, 32)) * 10)

    def test_empty_rejects(self):
        assert not looks_like_text(b"")


class TestClassify:
    def test_legacy_word_wins_over_msword_mime(self):
        category = classify(OLE_BUFFER, "application/msword", "report.doc")
        assert category == FormatCategory.LEGACY_WORD

    def test_doc_name_with_zip_content_is_modern_word(self, docx_bytes):
        category = classify(docx_bytes, "application/msword", "report.doc")
        assert category == FormatCategory.MODERN_WORD

    def test_doc_name_without_container_is_modern_word(self):
        category = classify(b"not a container", "", "notes.doc")
        assert category == FormatCategory.MODERN_WORD

    def test_xls_name_is_legacy_excel(self):
        assert classify(OLE_BUFFER, "application/vnd.ms-excel", "budget.xls") == FormatCategory.LEGACY_EXCEL

    def test_xls_name_with_spreadsheetml_mime_is_modern_excel(self, xlsx_bytes):
        category = classify(xlsx_bytes, MIME_XLSX, "budget.xls")
        assert category == FormatCategory.MODERN_EXCEL

    def test_xlsx_sniffed_without_name(self, xlsx_bytes):
        assert classify(xlsx_bytes, "", "download") == FormatCategory.MODERN_EXCEL

    def test_pdf_by_mime_extension_or_magic(self):
        assert classify(b"anything", "application/pdf", "file") == FormatCategory.PDF
        assert classify(b"anything", "", "file.pdf") == FormatCategory.PDF
        assert classify(b"%PDF-1.4 rest", "application/octet-stream", "download") == FormatCategory.PDF

    def test_image(self):
        assert classify(b"\xff\xd8\xff\xe0 jpeg", "image/jpeg", "photo.jpg") == FormatCategory.IMAGE

    def test_text_by_extension_and_mime(self):
        assert classify(b"a,b\n1,2", "", "table.csv") == FormatCategory.PLAIN_TEXT
        assert classify(b"# Title", "text/markdown", "notes") == FormatCategory.PLAIN_TEXT

    def test_text_sniffed_without_extension(self):
        assert classify(b"Plain notes without a name", "", "README") == FormatCategory.PLAIN_TEXT

    def test_opendocument_text_mime_is_not_plain_text(self, odt_bytes):
        signals = collect_signals(odt_bytes, "application/vnd.oasis.opendocument.text", "report.odt")
        assert not signals.is_text
        assert signals.is_zip_container
        category = classify(odt_bytes, "application/vnd.oasis.opendocument.text", "report.odt")
        assert category == FormatCategory.UNSUPPORTED

    @pytest.mark.parametrize("file_name", ["report.txt", "report"])
    def test_text_hints_do_not_override_sniffed_containers(self, odt_bytes, file_name):
        assert classify(odt_bytes, "text/plain", file_name) == FormatCategory.UNSUPPORTED
        assert classify(OLE_BUFFER, "text/plain", file_name) == FormatCategory.UNSUPPORTED

    def test_unknown_extension_with_text_content_is_unsupported(self):
        assert classify(b"Plain notes", "", "notes.xyz") == FormatCategory.UNSUPPORTED

    def test_binary_without_hints_is_unsupported(self):
        assert classify(bytes(range(256)), "", "blob") == FormatCategory.UNSUPPORTED

    @pytest.mark.parametrize("file_name", ["malware.exe", "backup.zip", "server.log", "disk.iso", "song.mp3"])
    def test_denied_extensions_are_rejected_without_sniffing(self, monkeypatch, file_name):
        def fail(buffer):
            raise AssertionError("denied buffers must not be sniffed")

        monkeypatch.setattr(classifier, "sniff_format", fail)
        category = classify(b"%PDF-1.4 looks like a pdf", "application/pdf", file_name)
        assert category == FormatCategory.UNSUPPORTED

    def test_collect_signals_reports_evidence(self, docx_bytes):
        signals = collect_signals(docx_bytes, "", "Report.DOCX")
        assert signals.extension == "docx"
        assert signals.sniffed_extension == "docx"
        assert signals.is_wordprocessing_markup
        assert not signals.is_ole_container
        assert not signals.is_denied
