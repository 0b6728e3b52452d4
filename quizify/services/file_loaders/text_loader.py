"""
Plain text (.txt) loader
"""
from typing import List
from loguru import logger

from quizify.core.interfaces.file_loader import FileLoader, LoadedDocument


class TextLoader(FileLoader):
    """Decode uploaded plain text files"""

    def __init__(self, encodings: List[str] = None):
        self.supported_extensions = ["txt"]
        self.encodings = encodings or ["utf-8-sig", "latin-1"]

    async def load(self, data: bytes, filename: str) -> LoadedDocument:
        for encoding in self.encodings:
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError:
                continue
            logger.info(f"📄 Loaded text file {filename} ({len(text)} characters, {encoding})")
            return LoadedDocument(
                text=text,
                metadata={"filename": filename, "encoding": encoding, "source_type": "txt"}
            )
        raise ValueError(f"Could not decode text file {filename}")

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions.copy()
