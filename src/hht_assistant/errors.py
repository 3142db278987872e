from typing import Optional

from hht_assistant.schemas import ErrorResponse


class SearchError(Exception):
    """
    Base class for every failure the search relay reports to its caller.
    Each subclass fixes the HTTP status and the human-readable message.
    """

    status_code = 500
    message = "Search failed"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, details=self.details)


class InvalidRequest(SearchError):
    status_code = 400
    message = "Query parameter is required"


class NotFound(SearchError):
    status_code = 404
    message = "No videos found"


class UpstreamFailure(SearchError):
    status_code = 500
    message = "Failed to search YouTube"
