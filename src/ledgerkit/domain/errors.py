"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ImportPayloadError(DomainError):
    """Import payload could not be decoded or contains no data.

    Unlike row-level problems, which are collected into the import result,
    this fails the whole import call.
    """


def unknown_format(format_id: str, known: list[str]) -> str:
    """Return message for an unsupported export format."""
    return f"Unknown file format '{format_id}'. Must be one of: {', '.join(known)}"


def unknown_canonical_field(field_name: str, known: list[str]) -> str:
    """Return message for a field mapping targeting an unknown field."""
    return f"Invalid account field '{field_name}'. Must be one of: {', '.join(known)}"


def chart_account_not_found(code: str) -> str:
    """Return message for missing chart account."""
    return f"Account '{code}' not found"


def duplicate_chart_account(code: str) -> str:
    """Return message for duplicate chart account code."""
    return f"Account with code '{code}' already exists"


def missing_code_and_name() -> str:
    """Return row error message for rows without code and name."""
    return "Missing both account code and name"
