"""
Domain exceptions.

Domain exceptions represent structural failures: malformed input,
missing aggregates, duplicate keys and authorization problems.
Business outcomes of license validation (invalid key, inactive,
expired, device quota reached) are result values, not exceptions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationFailure(DomainException):
    """Raised when input is malformed, before any storage access."""

    def __init__(self, message: str = "Validation failed", code: str = "VALIDATION_FAILED"):
        super().__init__(message, code=code)


class InvalidPlanError(ValidationFailure):
    """Raised when a plan is not one of the enumerated tiers."""

    def __init__(self, message: str = "Invalid plan"):
        super().__init__(message, code="INVALID_PLAN")


class InvalidVersionError(ValidationFailure):
    """Raised when a version string cannot be converted to a build number."""

    def __init__(self, message: str = "Invalid version"):
        super().__init__(message, code="INVALID_VERSION")


class InvalidHistoryStatusError(ValidationFailure):
    """Raised when an update history row is closed with an unsupported status."""

    def __init__(self, message: str = "Invalid update history status"):
        super().__init__(message, code="INVALID_HISTORY_STATUS")


class NotFoundError(DomainException):
    """Base exception for a referenced aggregate that does not exist."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class ActivationNotFoundError(NotFoundError):
    """Raised when an active device activation is not found."""

    def __init__(self, message: str = "Device activation not found"):
        super().__init__(message, code="ACTIVATION_NOT_FOUND")


class ReleaseNotFoundError(NotFoundError):
    """Raised when a release version is not found."""

    def __init__(self, message: str = "Update version not found"):
        super().__init__(message, code="RELEASE_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for duplicate unique keys."""

    def __init__(self, message: str = "Resource already exists", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class DuplicateLicenseKeyError(ConflictError):
    """Raised by storage when a generated license key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class DuplicateActivationError(ConflictError):
    """Raised by storage when a machine already holds an active slot."""

    def __init__(self, message: str = "Machine already activated for this license"):
        super().__init__(message, code="DUPLICATE_ACTIVATION")


class ReleaseAlreadyExistsError(ConflictError):
    """Raised when a release version already exists."""

    def __init__(self, message: str = "Update version already exists"):
        super().__init__(message, code="RELEASE_ALREADY_EXISTS")


class UnauthorizedError(DomainException):
    """Raised when an admin operation runs without an authorized context."""

    def __init__(self, message: str = "Invalid admin secret"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(DomainException):
    """Raised when an authorized caller lacks permission for an operation."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, code="FORBIDDEN")


class InternalError(DomainException):
    """Base exception for infrastructure failures surfaced by the domain."""

    def __init__(self, message: str = "An internal error occurred", code: str = "INTERNAL_ERROR"):
        super().__init__(message, code=code)


class LicenseKeyGenerationError(InternalError):
    """Raised when no unique license key could be generated."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="LICENSE_KEY_GENERATION_FAILED")
