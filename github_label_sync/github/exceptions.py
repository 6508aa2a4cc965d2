"""Contains exceptions raised by the GitHub client adapter."""

from typing import Any


class GitHubUnprocessableEntityError(ValueError):
    """Raised when GitHub rejects a request with a 422 Unprocessable Entity response."""

    def __init__(self, function: str, message: str, errors: list[dict[str, Any]], url: Any = None) -> None:
        """Initializes the exception with the structured error payload returned by GitHub."""
        super().__init__(f"GitHub 422 error in {function}: {message} | errors: {errors} | url: {url}")
        self.function = function
        self.message = message
        self.errors = errors
        self.url = url

    @property
    def payload(self) -> dict[str, Any]:
        """The error body in the shape GitHub returned it."""
        return {"message": self.message, "errors": self.errors}
