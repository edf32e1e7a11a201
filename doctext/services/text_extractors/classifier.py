"""
Format Classifier.

Combines the declared MIME type, the file name extension and content
sniffing into one FormatCategory. Declared hints are untrusted: a buffer
named ``report.doc`` may really be a zip-based document, and a buffer
with no name at all may still be plain text.
"""
import io
import zipfile
from typing import Optional

import olefile

from ...core.config import SNIFF_PRINTABLE_RATIO, SNIFF_SAMPLE_SIZE
from ...core.logging_config import get_logger
from ...domain.value_objects import DetectedFormat, FormatCategory, FormatSignals

logger = get_logger(__name__)

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"

MIME_PDF = "application/pdf"
MIME_MSWORD = "application/msword"
MIME_MSEXCEL = "application/vnd.ms-excel"
MIME_OLE = "application/x-ole-storage"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
MIME_ZIP = "application/zip"

# Leading-bytes signatures checked before any container inspection
MAGIC_SIGNATURES = [
    (b"%PDF", MIME_PDF, "pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png", "png"),
    (b"\xff\xd8\xff", "image/jpeg", "jpg"),
    (b"GIF87a", "image/gif", "gif"),
    (b"GIF89a", "image/gif", "gif"),
    (b"II*\x00", "image/tiff", "tif"),
    (b"MM\x00*", "image/tiff", "tif"),
]

# Non-text binary containers: executables, archives, media, disk images, logs
DENIED_EXTENSIONS = frozenset({
    "exe", "dll", "so", "dylib", "msi", "com", "sys", "apk", "jar", "class",
    "zip", "rar", "7z", "tar", "gz", "tgz", "bz2", "xz", "cab",
    "mp3", "mp4", "wav", "avi", "mov", "mkv", "flac", "ogg", "webm", "wmv", "m4a",
    "iso", "img", "dmg", "vhd", "vhdx", "vmdk",
    "log",
    "bin", "dat",
})

MODERN_WORD_EXTENSIONS = frozenset({"docx", "docm", "dotx", "dotm", "doc"})
MODERN_EXCEL_EXTENSIONS = frozenset({"xlsx", "xls"})
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "tif", "tiff", "heic"})
TEXT_EXTENSIONS = frozenset({"txt", "md", "json", "csv"})

SUPPORTED_EXTENSIONS = frozenset(
    {"pdf"} | MODERN_WORD_EXTENSIONS | MODERN_EXCEL_EXTENSIONS | TEXT_EXTENSIONS
)


def get_extension(file_name: str) -> str:
    """
    Lower-cased substring after the last dot of a file name.

    Returns an empty string when there is no dot or the dot is the last character.
    """
    name = (file_name or "").lower()
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return ""
    return name[dot + 1:]


def _sniff_zip(buffer: bytes) -> DetectedFormat:
    """Inspect ZIP member names to tell Word from Excel containers."""
    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        names = zf.namelist()
    if any(n.startswith("word/") for n in names):
        return DetectedFormat(MIME_DOCX, "docx")
    if any(n.startswith("xl/") for n in names):
        return DetectedFormat(MIME_XLSX, "xlsx")
    return DetectedFormat(MIME_ZIP, "zip")


def _sniff_ole(buffer: bytes) -> DetectedFormat:
    """Inspect OLE2 stream names to tell legacy Word from legacy Excel."""
    ole = olefile.OleFileIO(io.BytesIO(buffer))
    try:
        if ole.exists("WordDocument"):
            return DetectedFormat(MIME_MSWORD, "doc")
        if ole.exists("Workbook") or ole.exists("Book"):
            return DetectedFormat(MIME_MSEXCEL, "xls")
    finally:
        ole.close()
    return DetectedFormat(MIME_OLE, "")


def sniff_format(buffer: bytes) -> DetectedFormat:
    """
    Infer the format of a buffer from its content alone.

    Never raises: a corrupt or unrecognized buffer yields an unknown format
    (or, for containers, the container type without its document kind).

    Args:
        buffer: Raw file content

    Returns:
        DetectedFormat with sniffed MIME type and extension
    """
    if not buffer:
        return DetectedFormat()

    for signature, mime_type, extension in MAGIC_SIGNATURES:
        if buffer.startswith(signature):
            return DetectedFormat(mime_type, extension)

    if buffer[:4] == b"RIFF" and buffer[8:12] == b"WEBP":
        return DetectedFormat("image/webp", "webp")

    # "BM" alone also starts ordinary text; require the zeroed reserved field
    if buffer[:2] == b"BM" and buffer[6:10] == b"\x00\x00\x00\x00":
        return DetectedFormat("image/bmp", "bmp")

    if buffer.startswith(ZIP_SIGNATURE):
        try:
            return _sniff_zip(buffer)
        except Exception as e:
            logger.debug(f"ZIP signature present but archive unreadable: {e}")
            return DetectedFormat(MIME_ZIP, "zip")

    if buffer.startswith(OLE_SIGNATURE):
        try:
            return _sniff_ole(buffer)
        except Exception as e:
            logger.debug(f"OLE signature present but container unreadable: {e}")
            return DetectedFormat(MIME_OLE, "")

    return DetectedFormat()


def looks_like_text(buffer: bytes) -> bool:
    """
    Heuristic plain-text check on the first bytes of a buffer.

    The sample is read one byte per character. Any null byte rejects it;
    otherwise the share of tab, newline, carriage return, printable ASCII
    and Latin-1 bytes must reach the configured ratio.
    """
    sample = buffer[:SNIFF_SAMPLE_SIZE]
    if not sample or b"\x00" in sample:
        return False
    printable = sum(
        1 for byte in sample
        if byte in (0x09, 0x0A, 0x0D) or 0x20 <= byte <= 0x7E or 0xA0 <= byte <= 0xFF
    )
    return printable / len(sample) >= SNIFF_PRINTABLE_RATIO


def collect_signals(
    buffer: bytes,
    declared_mime_type: str,
    file_name: str,
    detected: Optional[DetectedFormat] = None,
) -> FormatSignals:
    """
    Gather every classification signal once.

    Args:
        buffer: Raw file content
        declared_mime_type: MIME type reported by the storage provider
        file_name: File name reported by the storage provider
        detected: Pre-computed sniff result (sniffed here when omitted)
    """
    extension = get_extension(file_name)
    if extension in DENIED_EXTENSIONS:
        return FormatSignals(extension=extension, is_denied=True)

    if detected is None:
        detected = sniff_format(buffer)

    mimes = [m for m in ((declared_mime_type or "").lower(), detected.mime_type) if m]

    def any_mime(fragment: str) -> bool:
        return any(fragment in m for m in mimes)

    return FormatSignals(
        extension=extension,
        sniffed_extension=detected.extension,
        is_pdf=any_mime("pdf"),
        is_ole_container=buffer[:len(OLE_SIGNATURE)] == OLE_SIGNATURE,
        is_zip_container=buffer[:len(ZIP_SIGNATURE)] == ZIP_SIGNATURE,
        is_wordprocessing_markup=any_mime("wordprocessingml"),
        is_msword=any_mime("msword"),
        is_spreadsheet_markup=any_mime("spreadsheetml"),
        is_ms_excel=any_mime("ms-excel"),
        is_image=any_mime("image/"),
        is_text=any(m.startswith("text/") for m in mimes),
    )


def classify_signals(signals: FormatSignals, buffer: bytes) -> FormatCategory:
    """Apply the fixed priority table; first match wins."""
    ext = signals.extension

    if signals.is_denied:
        return FormatCategory.UNSUPPORTED

    if signals.is_pdf or ext == "pdf":
        return FormatCategory.PDF

    # Legacy containers are checked before modern ones
    if ext == "doc" and signals.is_ole_container and not signals.is_wordprocessing_markup:
        return FormatCategory.LEGACY_WORD

    if ext == "xls" and not signals.is_spreadsheet_markup:
        return FormatCategory.LEGACY_EXCEL

    if signals.is_wordprocessing_markup or signals.is_msword or ext in MODERN_WORD_EXTENSIONS:
        return FormatCategory.MODERN_WORD

    if signals.is_spreadsheet_markup or signals.is_ms_excel or ext in MODERN_EXCEL_EXTENSIONS:
        return FormatCategory.MODERN_EXCEL

    if signals.is_image or ext in IMAGE_EXTENSIONS:
        return FormatCategory.IMAGE

    # Text hints never turn a binary container into text
    if signals.is_ole_container or signals.is_zip_container:
        return FormatCategory.UNSUPPORTED

    if signals.is_text or ext in TEXT_EXTENSIONS:
        return FormatCategory.PLAIN_TEXT

    resolved = ext or signals.sniffed_extension
    if resolved in ("", "txt") and looks_like_text(buffer):
        return FormatCategory.PLAIN_TEXT

    return FormatCategory.UNSUPPORTED


def classify(buffer: bytes, declared_mime_type: str, file_name: str) -> FormatCategory:
    """
    Determine the document kind of a buffer.

    Deny-listed extensions are rejected before the buffer is inspected.

    Args:
        buffer: Raw file content
        declared_mime_type: MIME type reported by the storage provider
        file_name: File name reported by the storage provider

    Returns:
        FormatCategory selecting the extraction strategy
    """
    signals = collect_signals(buffer, declared_mime_type, file_name)
    category = classify_signals(signals, buffer)
    logger.debug(f"Classified '{file_name}' ({declared_mime_type}) as {category.value}: {signals}")
    return category
