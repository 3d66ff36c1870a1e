"""Exception taxonomy for the destination search engine."""


class SearchError(Exception):
    """Base class for errors reported back to search callers."""

    user_message = "Search failed. Please try again later."


class RequestValidationError(SearchError):
    """Raised when search parameters are invalid. The message is user-facing."""

    def __init__(self, message: str):
        super().__init__(message)
        self.user_message = message


class CollaboratorUnavailable(SearchError):
    """Raised when an upstream backend is exhausted after all retries."""

    def __init__(
        self,
        service: str,
        errors: list[Exception] | None = None,
        user_message: str | None = None,
    ):
        self.service = service
        self.errors = list(errors or [])
        detail = "; ".join(str(e) for e in self.errors) or "no attempts made"
        super().__init__(f"{service} unavailable after {len(self.errors)} attempt(s): {detail}")
        self.user_message = user_message or (
            f"{service} is temporarily unavailable. Please try again later."
        )
