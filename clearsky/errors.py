"""
Error Types

Request-scoped errors rendered as JSON by the application error handler.
"""


class ClearSkyError(Exception):
    """Base error carrying an HTTP status and an optional detail payload."""

    status_code = 500

    def __init__(self, message, detail=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {'error': self.message}
        if self.detail is not None:
            body['detail'] = self.detail
        return body


class InvalidInput(ClearSkyError):
    """A query parameter failed type or range validation."""
    status_code = 400


class UpstreamFailure(ClearSkyError):
    """The AQI provider or geocoder failed or returned an unusable payload."""
    status_code = 502
