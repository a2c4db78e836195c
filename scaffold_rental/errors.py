class StoreError(Exception):
    """Base class for failures reported by a record store."""

    def __init__(self, message: str, collection: str | None = None, key: str | None = None):
        super().__init__(message)
        self.message = message
        self.collection = collection
        self.key = key


class RemoteConflict(StoreError):
    """The data service refused an add because the key already exists."""


class RemoteNotFound(StoreError):
    """The data service has no record under the requested key."""


class ConnectionUnavailable(StoreError):
    """No connection to the data service has been established."""


class RemoteServiceError(StoreError):
    def __init__(self, message: str, status_code: int, collection: str | None = None, key: str | None = None):
        super().__init__(message, collection, key)
        self.status_code = status_code


class ReadOnlyFieldError(Exception):
    def __init__(self, field: str):
        super().__init__(f"Field '{field}' cannot be changed after creation")
        self.field = field


class AuthenticationRequired(Exception):
    pass


class PermissionDenied(Exception):
    pass
