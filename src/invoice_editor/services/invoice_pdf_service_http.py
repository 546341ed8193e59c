"""
HTTP implementation of InvoicePdfService.

Posts the invoice payload as JSON to the PDF backend and returns the binary
response. Any transport error, non-success status or empty body is folded
into SubmissionError; the original exception is chained for the logs.

The request has a timeout but no retry; preventing duplicate submissions
is left to the caller (see InvoiceEditorState.submit).
"""

import re
from typing import Any, Mapping
from urllib.parse import unquote, urljoin

import requests

from invoice_editor.lib import logs, objects
from invoice_editor.models.common import DEFAULT_FILENAME, PdfDocument
from invoice_editor.services.invoice_pdf_service import (
    InvoicePdfService,
    SubmissionError,
)

LOG = logs.logger(__file__)

DEFAULT_PATH = "/api/invoices/pdf"
DEFAULT_TIMEOUT = 30

_EXTENDED_FILENAME = re.compile(r"filename\*=([\w-]*)'[^']*'([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename="?([^";]+)"?', re.IGNORECASE)


class HttpInvoicePdfService(InvoicePdfService):
    """
    Client for the PDF-generation endpoint.

    Attributes:
        url: Full endpoint URL the payload is posted to.
        timeout: Request timeout in seconds.
        session: Shared requests session carrying the default headers.
    """

    def __init__(
        self,
        base_url: str,
        path: str = DEFAULT_PATH,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Backend root, e.g. "http://localhost:8080".
            path: Endpoint path appended to base_url.
            timeout: Request timeout in seconds.
        """
        self.url = urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/pdf",
            }
        )

    @property
    def description(self) -> str:
        return f"{type(self).__name__}({self.url})"

    def generate_pdf(self, payload: Mapping[str, Any]) -> PdfDocument:
        """
        POST the payload and return the document from the response body.

        Raises:
            SubmissionError: On timeout, connection failure, non-success
                status or an empty response body.
        """
        LOG.info(
            "generate_pdf - url:%s fingerprint:%s",
            self.url,
            objects.fingerprint(payload),
        )
        try:
            response = self.session.post(
                self.url,
                data=objects.to_json(payload),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            msg = f"Request to {self.url} timed out after {self.timeout}s"
            raise SubmissionError(msg) from exc
        except requests.exceptions.ConnectionError as exc:
            msg = f"Failed to connect to {self.url}"
            raise SubmissionError(msg) from exc
        except requests.exceptions.HTTPError as exc:
            msg = f"PDF backend returned status {exc.response.status_code}"
            raise SubmissionError(msg) from exc
        except requests.exceptions.RequestException as exc:
            msg = f"Request to {self.url} failed"
            raise SubmissionError(msg) from exc

        content = response.content
        if not content:
            raise SubmissionError("PDF backend returned an empty document")

        document = PdfDocument(
            content=content,
            content_type=response.headers.get("Content-Type", ""),
            filename=_filename(response.headers.get("Content-Disposition")),
        )
        if not document.is_pdf:
            LOG.warning(
                "generate_pdf - unexpected content type:%s", document.content_type
            )
        LOG.info(
            "generate_pdf - received filename:%s size:%s",
            document.filename,
            document.size,
        )
        return document


def _filename(content_disposition: str | None) -> str:
    """
    Extract the filename from a Content-Disposition header.

    The RFC 5987 ``filename*`` form is percent-decoded and preferred over
    a plain ``filename``.
    """
    if not content_disposition:
        return DEFAULT_FILENAME
    match = _EXTENDED_FILENAME.search(content_disposition)
    if match:
        charset = match.group(1) or "utf-8"
        try:
            return unquote(match.group(2).strip(), encoding=charset)
        except LookupError:
            return unquote(match.group(2).strip())
    match = _FILENAME.search(content_disposition)
    if match:
        return match.group(1).strip()
    return DEFAULT_FILENAME
