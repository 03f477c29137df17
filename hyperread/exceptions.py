"""
Exception classes for HyperRead.

All HyperRead exceptions inherit from HyperReadError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     doc = hyperread.load_pdf("scan.pdf")
    ... except hyperread.ExtractionError as e:
    ...     print(f"Could not read document: {e}")
    ... except hyperread.HyperReadError as e:
    ...     print(f"HyperRead error: {e}")
"""


class HyperReadError(Exception):
    """
    Base exception for all HyperRead errors.

    Catch this to handle any HyperRead-specific error.
    """

    pass


class UnsupportedFormatError(HyperReadError):
    """
    Raised when a document format is not supported.

    Example:
        >>> hyperread.load("file.docx")
        UnsupportedFormatError: Cannot detect format for: file.docx. Supported: pdf, text
    """

    pass


class ExtractionError(HyperReadError):
    """
    Raised when a source cannot be parsed.

    Covers corrupted files, encrypted PDFs and PDFs without a text layer.
    No partial Document is ever produced when this is raised.
    """

    pass


class EmptyInputError(HyperReadError):
    """
    Raised when tokenization yields zero chunks.

    A session that receives this keeps its previous Document.
    """

    pass


class AnalysisServiceError(HyperReadError):
    """
    Raised when the summarization/chat service fails.

    AnalysisService catches this and returns a placeholder, so callers
    of the high-level API never see it.
    """

    pass


class ConfigurationError(HyperReadError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> ReaderConfig(wpm=0)
        ConfigurationError: wpm must be between 60 and 1000, got 0
    """

    pass
