"""
Repository interfaces - Define contracts for remote drive access.
The extraction core never calls these; the orchestration layer does.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..domain.entities import DownloadedFile, ItemPage


class IDriveRepository(ABC):
    """
    Interface for the remote cloud-storage provider.
    Business logic depends on this interface, not concrete API clients.
    """
    
    @abstractmethod
    async def list_children(
        self,
        folder_id: str,
        access_token: str,
        page_token: Optional[str] = None
    ) -> ItemPage:
        """
        List one page of a folder's children.
        
        Args:
            folder_id: Remote folder identifier
            access_token: Bearer credential
            page_token: Continuation token from the previous page, None for the first
            
        Returns:
            ItemPage whose next_page_token is None on the last page
        """
        pass
    
    @abstractmethod
    async def download(self, file_id: str, access_token: str) -> DownloadedFile:
        """
        Download the raw bytes of a file.
        
        Args:
            file_id: Remote file identifier
            access_token: Bearer credential
            
        Returns:
            DownloadedFile with content and declared MIME type
        """
        pass
