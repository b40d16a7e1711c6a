"""Domain errors raised by the coaching services."""


class FitnessError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class NotAuthenticated(FitnessError):
    """No valid principal is attached to the request."""

    status_code = 401


class ProfileNotFound(FitnessError):
    """An authenticated principal has no stored profile."""

    status_code = 404

    def __init__(self, principal_id: str):
        super().__init__(f"No profile found for principal '{principal_id}'")
        self.principal_id = principal_id


class ValidationError(FitnessError):
    """Malformed input at the mutation boundary."""

    status_code = 422


class AccessDenied(FitnessError):
    """The caller does not own the requested client data."""

    status_code = 403


class StoreError(FitnessError):
    """The backing store reported a failure."""

    status_code = 500

    def __init__(self, message: str, collection: str = ""):
        super().__init__(message)
        self.collection = collection
