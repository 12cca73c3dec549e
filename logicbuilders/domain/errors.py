# logicbuilders/domain/errors.py


class ValidationFailed(ValueError):
    """Bad input (missing field, invalid quantity) -> 400."""


class BusinessRuleViolation(ValueError):
    """Request is well-formed but breaks a business rule -> 400."""

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.details = details


class NotFound(LookupError):
    """Missing row, or a row that does not belong to the caller -> 404."""


class ClearanceDenied(PermissionError):
    """Admin tier does not open this route -> 403."""

    def __init__(self, required: str, current: str):
        super().__init__("Insufficient clearance level.")
        self.required = required
        self.current = current
