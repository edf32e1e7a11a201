"""
DOC Text Extractor.

Extracts text from legacy Word (.doc) files stored in an OLE2 compound
container. The WordDocument stream is read through its piece table with
olefile; when that is impossible a raw byte scan salvages printable runs.

Binary layout used (Word 97-2003 File Information Block):
    - 0x00: wIdent, 0xA5EC (Word 97+) or 0xA5DC (Word 95)
    - 0x0A: flags; 0x0100 = encrypted, 0x0200 = piece table in 1Table
    - 0x4C: ccpText, character count of the main document body
    - 0x1A2 / 0x1A6: fcClx / lcbClx, offset and size of the CLX in the table stream
"""
import io
import re
import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import olefile

from .base import BaseTextExtractor, ExtractionMethod
from .classifier import OLE_SIGNATURE
from ...api.exceptions import UnsupportedContainerError
from ...core.config import (
    LEGACY_DOC_MAX_CHAR_REPEAT,
    LEGACY_DOC_MIN_RUN_LENGTH,
    LEGACY_DOC_MIN_UNIQUE_RATIO,
)
from ...core.logging_config import get_logger

logger = get_logger(__name__)

FIB_MAGIC_WORD97 = 0xA5EC
FIB_MAGIC_WORD95 = 0xA5DC
FIB_FLAGS_OFFSET = 0x0A
FIB_ENCRYPTED_FLAG = 0x0100
FIB_WHICH_TABLE_FLAG = 0x0200
FIB_CCP_TEXT_OFFSET = 0x4C
FIB_FC_CLX_OFFSET = 0x01A2
FIB_LCB_CLX_OFFSET = 0x01A6
FC_COMPRESSED_FLAG = 0x40000000

# Leftover FIB bytes that precede the text in raw scans, e.g. "bjbj\xfe\xffSTYLE:"
_GARBAGE_PREFIX = re.compile(r"^[a-z]{1,6}[^\w\s]+[A-Z]{1,6}[^\w\s]+\s*", re.IGNORECASE)
_FIELD_INSTRUCTION = re.compile(r"\x13[^\x13\x14\x15]*\x14?")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0e-\x1f]")


@dataclass(frozen=True)
class RawScanOptions:
    """
    Thresholds of the raw byte scan.

    Attributes:
        min_run_length: Shortest run of printable characters kept
        min_unique_ratio: Runs with a smaller share of distinct characters are dropped
        max_char_repeat: Runs where one character repeats this many times in a row are dropped
    """
    min_run_length: int = field(default=LEGACY_DOC_MIN_RUN_LENGTH)
    min_unique_ratio: float = field(default=LEGACY_DOC_MIN_UNIQUE_RATIO)
    max_char_repeat: int = field(default=LEGACY_DOC_MAX_CHAR_REPEAT)


def scan_printable_runs(file_bytes: bytes, options: Optional[RawScanOptions] = None) -> str:
    """
    Salvage readable text from an opaque binary buffer.

    The buffer is read one byte per character (Latin-1), never as UTF-8.

    Args:
        file_bytes: Raw file content
        options: Scan thresholds (defaults from configuration)

    Returns:
        Surviving runs joined by single spaces, possibly empty
    """
    options = options or RawScanOptions()
    decoded = file_bytes.decode("latin-1")
    run_pattern = re.compile(r"[\x20-\x7e\xa0-\xff]{%d,}" % max(options.min_run_length, 1))
    repeat_pattern = re.compile(r"(.)\1{%d,}" % max(options.max_char_repeat - 1, 0))

    runs = []
    for match in run_pattern.finditer(decoded):
        run = match.group(0).strip()
        if not run:
            continue
        if len(set(run)) / len(run) < options.min_unique_ratio:
            continue
        if repeat_pattern.search(run):
            continue
        runs.append(run)

    text = " ".join(runs)
    return _GARBAGE_PREFIX.sub("", text, count=1)


def _clean_word_text(text: str) -> str:
    """Map Word control characters to plain-text equivalents."""
    text = _FIELD_INSTRUCTION.sub("", text)
    text = text.replace("\x15", "")
    text = text.replace("\x07", "\t")
    text = text.replace("\x0b", "\n")
    text = text.replace("\x0c", "\n\n")
    text = text.replace("\r", "\n")
    return _CONTROL_CHARS.sub("", text)


def _read_pieces(clx: bytes) -> List[Tuple[int, int, int]]:
    """
    Parse the CLX structure into (cp_start, cp_end, fc) pieces.

    Raises:
        ValueError: If the CLX holds no piece table
    """
    pos = 0
    while pos < len(clx) and clx[pos] == 0x01:
        # Prc: skip the property modifiers
        cb_grpprl = struct.unpack_from("<H", clx, pos + 1)[0]
        pos += 3 + cb_grpprl

    if pos >= len(clx) or clx[pos] != 0x02:
        raise ValueError("CLX has no piece table")

    lcb = struct.unpack_from("<I", clx, pos + 1)[0]
    plc = clx[pos + 5:pos + 5 + lcb]
    count = (len(plc) - 4) // 12
    if count <= 0:
        raise ValueError("Empty piece table")

    cps = struct.unpack_from("<%dI" % (count + 1), plc, 0)
    pieces = []
    for i in range(count):
        # Pcd: 2 bytes of flags, 4 bytes of FcCompressed, 2 bytes of prm
        fc = struct.unpack_from("<I", plc, 4 * (count + 1) + 8 * i + 2)[0]
        pieces.append((cps[i], cps[i + 1], fc))
    return pieces


def read_word_document(file_bytes: bytes) -> str:
    """
    Read the main body text of a Word 97-2003 document.

    Args:
        file_bytes: Complete OLE2 container

    Returns:
        Main document text with control characters mapped

    Raises:
        UnsupportedContainerError: If the buffer is not an OLE2 Word container
        ValueError: If the container is a Word document that cannot be decoded
    """
    if not file_bytes.startswith(OLE_SIGNATURE):
        raise UnsupportedContainerError("Not an OLE2 compound document")

    with olefile.OleFileIO(io.BytesIO(file_bytes)) as ole:
        if not ole.exists("WordDocument"):
            raise UnsupportedContainerError("OLE2 container has no WordDocument stream")
        word_doc = ole.openstream("WordDocument").read()

        if len(word_doc) < FIB_LCB_CLX_OFFSET + 4:
            raise ValueError("WordDocument stream too small")

        magic = struct.unpack_from("<H", word_doc, 0)[0]
        if magic not in (FIB_MAGIC_WORD97, FIB_MAGIC_WORD95):
            raise ValueError(f"Not a valid .doc file (magic: {hex(magic)})")

        flags = struct.unpack_from("<H", word_doc, FIB_FLAGS_OFFSET)[0]
        if flags & FIB_ENCRYPTED_FLAG:
            raise ValueError("DOC is encrypted or password-protected")

        table_name = "1Table" if flags & FIB_WHICH_TABLE_FLAG else "0Table"
        if not ole.exists(table_name):
            raise ValueError(f"Missing {table_name} stream")
        table = ole.openstream(table_name).read()

    ccp_text = struct.unpack_from("<I", word_doc, FIB_CCP_TEXT_OFFSET)[0]
    fc_clx = struct.unpack_from("<I", word_doc, FIB_FC_CLX_OFFSET)[0]
    lcb_clx = struct.unpack_from("<I", word_doc, FIB_LCB_CLX_OFFSET)[0]
    pieces = _read_pieces(table[fc_clx:fc_clx + lcb_clx])

    parts = []
    for cp_start, cp_end, fc in pieces:
        if cp_start >= ccp_text:
            break
        chars = min(cp_end, ccp_text) - cp_start
        if fc & FC_COMPRESSED_FLAG:
            offset = (fc & ~FC_COMPRESSED_FLAG) // 2
            parts.append(word_doc[offset:offset + chars].decode("cp1252", errors="replace"))
        else:
            parts.append(word_doc[fc:fc + 2 * chars].decode("utf-16-le", errors="replace"))

    return _clean_word_text("".join(parts))


class DOCExtractor(BaseTextExtractor):
    """Extractor for DOC (old Word format) files."""

    def __init__(self, scan_options: Optional[RawScanOptions] = None):
        super().__init__("doc", "Legacy Word")
        self.scan_options = scan_options or RawScanOptions()

    def methods(self) -> List[ExtractionMethod]:
        return [
            ExtractionMethod("ole-word-document", read_word_document),
            ExtractionMethod("raw-binary-scan", self._scan),
        ]

    def get_error_message(self) -> str:
        return (
            "Legacy Word document is unsupported; "
            "convert it to .docx before uploading"
        )

    def _scan(self, file_bytes: bytes) -> str:
        return scan_printable_runs(file_bytes, self.scan_options)
