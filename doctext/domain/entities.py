"""
Domain entities - Objects exchanged with the remote storage collaborators.
These mirror what the drive API returns, not any persistence model.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DriveItem:
    """
    A child entry of a remote folder.
    
    Folders carry a child count, files carry a MIME type; an item with
    neither is neither traversed nor extracted.
    """
    id: str
    name: str
    mime_type: Optional[str] = None
    size: Optional[int] = None
    child_count: Optional[int] = None
    web_url: Optional[str] = None
    parent_id: Optional[str] = None
    parent_path: Optional[str] = None
    
    def is_folder(self) -> bool:
        """Check if item is a folder."""
        return self.child_count is not None
    
    def is_file(self) -> bool:
        """Check if item is a file."""
        return not self.is_folder() and self.mime_type is not None


@dataclass
class DriveFile:
    """A file selected for text extraction."""
    id: str
    name: str
    mime_type: str = ""
    size: Optional[int] = None
    web_url: Optional[str] = None
    path: Optional[str] = None
    
    @classmethod
    def from_item(cls, item: DriveItem) -> "DriveFile":
        return cls(
            id=item.id,
            name=item.name,
            mime_type=item.mime_type or "",
            size=item.size,
            web_url=item.web_url,
            path=item.parent_path,
        )


@dataclass
class ItemPage:
    """One page of folder children; ``next_page_token`` is None on the last page."""
    items: List[DriveItem] = field(default_factory=list)
    next_page_token: Optional[str] = None


@dataclass
class DownloadedFile:
    """Raw bytes of a remote file and the MIME type the remote declared for it."""
    content: bytes
    mime_type: str = ""


@dataclass(frozen=True)
class FileExtractionFailure:
    """A file that could not be vectorized, with the reason as status."""
    id: str
    name: str
    path: Optional[str]
    status: str
