"""
Document Text Service Interface.

Defines the contract for extracting text from remote drive files.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

from ...domain.entities import DriveFile, FileExtractionFailure
from ...domain.value_objects import ExtractionResult


class IDocumentTextService(ABC):
    """
    Interface for per-file text extraction.
    
    Downloads a file through the drive repository and runs the extraction
    core on its bytes.
    """
    
    @abstractmethod
    async def extract_file(self, file: DriveFile) -> ExtractionResult:
        """
        Extract text from one remote file.
        
        Args:
            file: File to download and extract
            
        Returns:
            ExtractionResult with validated text
            
        Raises:
            TextExtractionError: If the file is not vectorizable
        """
        pass
    
    @abstractmethod
    async def extract_files(
        self,
        files: Iterable[DriveFile]
    ) -> Tuple[Dict[str, ExtractionResult], List[FileExtractionFailure]]:
        """
        Extract text from several files, collecting per-file failures.
        
        Args:
            files: Files to process
            
        Returns:
            Tuple of (results keyed by file id, failure records)
        """
        pass
