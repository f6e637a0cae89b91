"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested item, account, category or transaction does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a second link of the same external item."""


class ConfigurationError(DomainError):
    """Missing or invalid settings, such as absent feed credentials."""


class FeedError(DomainError):
    """Error reported by the remote transaction feed.

    Attributes:
        error_code: Feed error code (e.g. ``ITEM_LOGIN_REQUIRED``), or None
            when the feed did not report one
        error_message: Human readable message from the feed
    """

    def __init__(self, error_code: str | None, error_message: str):
        self.error_code = error_code
        self.error_message = error_message
        if error_code:
            super().__init__(f"{error_code}: {error_message}")
        else:
            super().__init__(error_message)


ITEM_LOGIN_REQUIRED = "ITEM_LOGIN_REQUIRED"


def item_not_found(item_id: int) -> str:
    """Return message for missing item."""
    return f"Item {item_id} not found"


def external_item_not_found(external_id: str) -> str:
    """Return message for missing item by external ID."""
    return f"Item '{external_id}' not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def external_account_not_found(external_id: str) -> str:
    return f"Account with external ID '{external_id}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def category_path_not_found(path: str) -> str:
    """Return message for missing category by path."""
    return f"Category '{path}' not found"


def duplicate_item(external_id: str) -> str:
    return f"Item '{external_id}' is already linked"
