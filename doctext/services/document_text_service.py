"""
Document Text Service

Downloads drive files and runs the extraction core on them. Per-file
extraction failures are expected outcomes: extract_files() turns them into
failure records instead of aborting the batch.
"""
import asyncio
from typing import Dict, Iterable, List, Tuple

from .interfaces import IDocumentTextService, ITokenSupplier
from .text_extractors import extract_text
from ..api.exceptions import TextExtractionError
from ..core.logging_config import get_logger
from ..domain.entities import DriveFile, FileExtractionFailure
from ..domain.value_objects import ExtractionResult
from ..repositories.interfaces import IDriveRepository

logger = get_logger(__name__)


class DocumentTextService(IDocumentTextService):
    """
    Document text service implementation.
    Files are processed one after another; callers wanting parallelism fan
    out over several calls themselves.
    """
    
    def __init__(self, repository: IDriveRepository, tokens: ITokenSupplier):
        """
        Initialize the service.
        
        Args:
            repository: Drive repository used to download files
            tokens: Supplier of the bearer token for the repository
        """
        self.repository = repository
        self.tokens = tokens
    
    async def extract_file(self, file: DriveFile) -> ExtractionResult:
        downloaded = await self.repository.download(file.id, self.tokens.require_token())
        mime_type = downloaded.mime_type or file.mime_type
        
        # Parsing is CPU-bound; keep it off the event loop
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, extract_text, downloaded.content, mime_type, file.name)
    
    async def extract_files(
        self,
        files: Iterable[DriveFile]
    ) -> Tuple[Dict[str, ExtractionResult], List[FileExtractionFailure]]:
        results: Dict[str, ExtractionResult] = {}
        failures: List[FileExtractionFailure] = []
        
        for file in files:
            try:
                results[file.id] = await self.extract_file(file)
            except TextExtractionError as e:
                logger.info(f"Skipping {file.name}: {e.reason}")
                failures.append(
                    FileExtractionFailure(id=file.id, name=file.name, path=file.path, status=e.reason)
                )
        
        logger.info(f"Extracted {len(results)} files, {len(failures)} not vectorizable")
        return results, failures
