"""REPLYDESK — Error Taxonomy.

Every failure is request-scoped. Services raise these; the API layer maps
them onto HTTP statuses.
"""


class ReplyDeskError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputValidationError(ReplyDeskError):
    """Raised when caller input is empty or malformed."""

    status_code = 400


class NotFoundError(ReplyDeskError):
    """Raised when a configuration, response or profile does not exist."""

    status_code = 404

    def __init__(self, message: str, entity: str = "", entity_id: object = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message)


class GenerationError(ReplyDeskError):
    """Raised when the text-generation provider fails or returns nothing."""

    status_code = 502

    def __init__(self, message: str, provider: str = ""):
        self.provider = provider
        super().__init__(message)


class ProviderUnavailableError(GenerationError):
    """Raised when no usable provider is configured."""

    status_code = 503


class PersistenceError(ReplyDeskError):
    """Raised when the underlying store cannot be read or written."""

    status_code = 500
