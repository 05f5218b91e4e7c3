from typing import Optional


class BuilderError(Exception):
    """
    Base class for errors surfaced to the builder user.

    `kind` is the stable error name used in API payloads.
    """
    kind = "BuilderError"
    status_code = 400

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        data = {"error": self.kind, "message": self.message}
        if self.field:
            data["field"] = self.field
        return data


class ValidationError(BuilderError):
    kind = "ValidationError"
    status_code = 400


class NotFoundError(BuilderError):
    kind = "NotFoundError"
    status_code = 404


class ConflictError(BuilderError):
    kind = "ConflictError"
    status_code = 409


class GatewayError(BuilderError):
    kind = "GatewayError"
    status_code = 502


class InvariantViolation(BuilderError):
    kind = "InvariantViolation"
    status_code = 400
