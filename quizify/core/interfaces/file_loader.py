"""
Abstract interface for file loaders
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any
from pydantic import BaseModel, Field


class LoadedDocument(BaseModel):
    """Plain text extracted from an uploaded file"""
    text: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class FileLoader(ABC):
    """
    Abstract base class for local file loaders

    Each supported upload type (plain text, PDF) implements this interface
    """

    @abstractmethod
    async def load(self, data: bytes, filename: str) -> LoadedDocument:
        """
        Extract text from raw file bytes

        Args:
            data: File content
            filename: Original filename for metadata

        Returns:
            LoadedDocument with text and metadata

        Raises:
            ValueError: If the file cannot be read
        """
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """
        Get list of supported file extensions

        Returns:
            List of supported extensions
        """
        pass

    def supports_file_type(self, file_extension: str) -> bool:
        """Check if this loader supports the given file extension"""
        return file_extension.lower().lstrip(".") in self.get_supported_extensions()
