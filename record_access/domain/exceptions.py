from typing import Optional


class DomainError(Exception):
    pass


class InvalidParameterError(DomainError):
    def __init__(self, parameter: str, reason: str):
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid parameter '{parameter}': {reason}")


class InvalidPageRequestError(DomainError):
    pass


class MissingOrderingKeyError(DomainError):
    pass


class DataIntegrityViolationError(DomainError):
    pass


class StoreError(DomainError):
    pass


class StoreTimeoutError(StoreError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Record store did not answer within {timeout:g}s")


class StoreUnavailableError(StoreError):
    pass


class StoreCommandError(StoreError):
    """The store rejected a statement (constraint violation, bad SQL, ...)."""


class CreateFailedError(DomainError):
    phase: str = "unknown"

    def __init__(self, message: str, entity: Optional[str] = None):
        self.entity = entity
        super().__init__(message)


class WriteFailedError(CreateFailedError):
    phase = "write"


class ReadBackFailedError(CreateFailedError):
    phase = "read_back"
