"""
Common models shared between the PDF services and the editor state.

- PdfDocument: the binary document returned by the PDF backend
- SubmissionStatus: outcome of the latest submission, kept in reflex state

SubmissionStatus is built by the editor state after each submit and its
fields are copied into reactive vars.
"""

from dataclasses import dataclass, field

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_FILENAME = "invoice.pdf"


@dataclass(slots=True)
class PdfDocument:
    """
    Binary document produced for a submitted invoice.

    Attributes:
        content: Raw document bytes.
        content_type: MIME type reported by the backend.
        filename: Suggested download filename.
    """

    content: bytes
    content_type: str = PDF_CONTENT_TYPE
    filename: str = DEFAULT_FILENAME

    @property
    def is_pdf(self) -> bool:
        """Check if the reported content type is a PDF."""
        return self.content_type.split(";")[0].strip().lower() == PDF_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class SubmissionStatus:
    """
    Result of the most recent invoice submission.

    Attributes:
        succeeded: True when a document was received.
        error: User-facing failure message, empty on success.
        filename: Name of the received document.
        size: Size of the received document in bytes.
        fingerprint: Short hash of the submitted payload.
    """

    succeeded: bool = field(default=False)
    error: str = field(default="")
    filename: str = field(default="")
    size: int = field(default=0)
    fingerprint: str = field(default="")

    @classmethod
    def success(cls, document: PdfDocument, fingerprint: str = "") -> "SubmissionStatus":
        return cls(
            succeeded=True,
            filename=document.filename,
            size=document.size,
            fingerprint=fingerprint,
        )

    @classmethod
    def failure(cls, error: str, fingerprint: str = "") -> "SubmissionStatus":
        return cls(succeeded=False, error=error, fingerprint=fingerprint)
