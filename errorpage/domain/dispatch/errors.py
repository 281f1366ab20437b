"""
Domain-specific errors for the dispatch bounded context.

All errors raised from the domain layer must be defined here.
No framework imports allowed.
"""


class DispatchDomainError(Exception):
    """Base error for all dispatch domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidMessageTemplateError(DispatchDomainError, ValueError):
    """Raised when an error message template cannot take a report id."""

    def __init__(self, template: str, reason: str) -> None:
        super().__init__(f"Invalid message template {template!r}: {reason}")
        self.template = template
        self.reason = reason


class UnknownTemplateError(DispatchDomainError):
    """Raised when a view model names a template nobody registered."""

    def __init__(self, template: str) -> None:
        super().__init__(f"Unknown view template: {template}")
        self.template = template
