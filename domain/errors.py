"""Exception hierarchy for the listing engine."""


class ListingError(Exception):
    """Base class for all listing engine errors."""


class TaxonomyLoadError(ListingError):
    """Raised when the geography or industry taxonomy cannot be loaded."""


class FormValidationError(ListingError, ValueError):
    """A required form field is missing. Recoverable: the user fixes it and resubmits."""

    field: str = ""
    default_message: str = "Form is incomplete"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MissingTitleError(FormValidationError):
    field = "deal_title"
    default_message = "Deal title is required"


class MissingDescriptionError(FormValidationError):
    field = "company_description"
    default_message = "Company description is required"


class MissingGeographyError(FormValidationError):
    field = "geography"
    default_message = "Please select a geography"


class MissingIndustryError(FormValidationError):
    field = "industry"
    default_message = "Please select at least one industry"


class AuthenticationRequiredError(ListingError):
    """Session context lacks a token, a seller role, or a seller id."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class SubmissionError(ListingError):
    """The submission service rejected the payload or could not be reached."""


class DocumentTooLargeError(ListingError, ValueError):
    """Attachment exceeds the configured size limit."""


class InvalidFieldValueError(FormValidationError):
    """A recorded answer cannot be applied to its field (non-numeric text, unknown currency, ...)."""

    default_message = "Invalid field value"

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message)
        self.field = field
