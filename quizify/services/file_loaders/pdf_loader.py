"""
PDF text loader using PyMuPDF
"""
from typing import List
import fitz  # PyMuPDF
from loguru import logger

from quizify.core.interfaces.file_loader import FileLoader, LoadedDocument


class PDFLoader(FileLoader):
    """
    PDF loader using PyMuPDF for local text extraction

    Used when PDF_EXTRACTION_MODE=local, so a PDF can be turned into quiz
    content without sending the whole document to the model.
    """

    def __init__(self):
        self.supported_extensions = ["pdf"]

    async def load(self, data: bytes, filename: str) -> LoadedDocument:
        """
        Extract the text of every page

        Args:
            data: PDF bytes
            filename: Original filename for metadata

        Returns:
            LoadedDocument with page texts joined by blank lines
        """
        try:
            pdf_doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            logger.error(f"❌ Failed to open PDF {filename}: {e}")
            raise ValueError(f"Failed to process PDF file: {e}") from e

        try:
            total_pages = len(pdf_doc)
            logger.info(f"📄 Processing PDF with PyMuPDF: {filename} ({total_pages} pages)")

            page_texts = []
            for page_num in range(total_pages):
                try:
                    page_text = pdf_doc[page_num].get_text()
                except Exception as e:
                    logger.warning(f"Failed to extract text from page {page_num + 1} of {filename}: {e}")
                    continue
                if page_text.strip():
                    page_texts.append(page_text.strip())
        finally:
            pdf_doc.close()

        text = "\n\n".join(page_texts)
        logger.info(f"✅ PDF processed: {filename} -> {len(text)} characters")
        return LoadedDocument(
            text=text,
            metadata={
                "filename": filename,
                "total_pages": total_pages,
                "pages_with_text": len(page_texts),
                "source_type": "pdf",
            }
        )

    def get_supported_extensions(self) -> List[str]:
        """Get list of supported file extensions"""
        return self.supported_extensions.copy()
