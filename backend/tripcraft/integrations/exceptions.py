class IntegrationError(Exception):
    """Base exception for integration-level failures (config, connectivity, auth)."""


class UpstreamAPIError(Exception):
    """Represents an upstream API call failure (quota, 4xx/5xx, timeout, malformed response)."""


class MalformedPlanError(UpstreamAPIError):
    """The generation service answered, but not with a usable {hotel, days} plan."""


class TripcraftError(Exception):
    """Base for errors reported to API callers. `status_code` picks the HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoDestinationDataError(TripcraftError):
    status_code = 404


class ItineraryNotFoundError(TripcraftError):
    status_code = 404


class AuthenticationRequiredError(TripcraftError):
    status_code = 401


class NotAuthorizedError(TripcraftError):
    status_code = 403


class InvalidItineraryError(TripcraftError):
    status_code = 422
