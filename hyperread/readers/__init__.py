"""PDF text-layer reading module.

Produces positioned text fragments per page using PyMuPDF.
"""

from hyperread.readers.pdf_reader import (
    PageData,
    PDFReader,
    RawDocument,
    TextFragment,
)

__all__ = [
    "PDFReader",
    "RawDocument",
    "PageData",
    "TextFragment",
]
