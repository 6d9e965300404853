"""Base types shared by the extraction engine."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from listing_reconciler.validation.models import CanonicalProperty


class SourceKind(str, Enum):
    """Listing site a page or URL belongs to."""
    REDFIN = "redfin"
    ZILLOW = "zillow"
    REALTOR = "realtor"


class ErrorKind(str, Enum):
    """Failures reported to the caller (everything else is silent omission)."""
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_SHAPE = "INVALID_SHAPE"
    UNRECOGNIZED_SOURCE = "UNRECOGNIZED_SOURCE"


USER_MESSAGES = {
    ErrorKind.EMPTY_INPUT: (
        "Nothing to import. Copy the listing to your clipboard first, then try again."
    ),
    ErrorKind.INVALID_SHAPE: (
        "The clipboard does not contain valid structured data. Make sure to copy "
        "the complete JSON object starting with { and ending with }."
    ),
    ErrorKind.UNRECOGNIZED_SOURCE: (
        "Please use a listing from Redfin, Zillow, or Realtor.com."
    ),
}


class ExtractionError(Exception):
    """Raised inside the pipeline for a classified, user-facing failure."""

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        super().__init__(detail or kind.value)

    @property
    def message(self) -> str:
        return USER_MESSAGES[self.kind]


@dataclass(frozen=True)
class PageSnapshot:
    """A captured listing page.

    ``text`` is the page's visible text when the capturing side already has
    it (e.g. ``document.body.innerText``); otherwise it is derived from
    ``html``.
    """
    url: str
    html: str = ""
    text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.html or "").strip() and not (self.text or "").strip()


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of one engine call: a record or a classified error."""
    record: Optional["CanonicalProperty"] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def failed(cls, exc: ExtractionError) -> "ExtractionOutcome":
        return cls(error=exc.kind, message=exc.message)

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None

    @property
    def needs_assist(self) -> bool:
        """True when the record is too sparse to be a usable listing.

        Callers hand such inputs to the AI extraction collaborator.
        """
        if not self.ok:
            return False
        return self.record.address is None and self.record.price is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "record": self.record.to_fields() if self.record is not None else None,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "needs_assist": self.needs_assist,
        }
