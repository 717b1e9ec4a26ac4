class InvariantViolation(Exception):
    """Raised when a write would break a homepage or section invariant."""


class FieldValidationError(InvariantViolation):
    """
    One or more request fields are malformed.

    `fields` maps the offending key to a human-readable message so the
    editor can show it inline next to the input.
    """

    def __init__(self, fields, message=None):
        self.fields = dict(fields)
        if message is None:
            message = "; ".join(f"{key}: {msg}" for key, msg in self.fields.items())
        super().__init__(message)


class SectionDataInvalid(FieldValidationError):
    """A sectionData payload does not match its component's schema."""

    def __init__(self, component, fields):
        self.component = component
        summary = "; ".join(f"{key}: {msg}" for key, msg in dict(fields).items())
        super().__init__(fields, f"Invalid configuration for {component}: {summary}")
