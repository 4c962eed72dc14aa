"""
Error taxonomy for the recipe assistant.

Every error the engine reports to a caller derives from RecipeAssistantError
and carries the HTTP status the API layer renders it with. MalformedAIOutput
is internal to the substitution agent and is never surfaced.
"""

from fastapi import status


class RecipeAssistantError(Exception):
    """Base class for errors reported to the caller as {"error": message}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecipeValidationError(RecipeAssistantError):
    """Malformed or missing recipe / request fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(RecipeAssistantError):
    """No caller identity was forwarded with the request."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(RecipeAssistantError):
    """A referenced record is absent from the record store."""

    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(RecipeAssistantError):
    """Reasoning service credentials or provider are not configured."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AIServiceUnavailable(RecipeAssistantError):
    """The reasoning service could not be reached or returned an error."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class MalformedAIOutput(Exception):
    """The reasoning service reply did not contain a usable proposal."""
