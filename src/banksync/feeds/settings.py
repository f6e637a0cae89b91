"""Plaid connection settings."""

import os
from dataclasses import dataclass
from typing import Optional

PLAID_ENVIRONMENTS = ("sandbox", "production")


@dataclass(frozen=True)
class PlaidSettings:
    """Credentials and environment for the Plaid API."""

    client_id: Optional[str]
    secret: Optional[str]
    environment: str = "sandbox"

    @classmethod
    def from_env(cls) -> "PlaidSettings":
        """Read settings from PLAID_CLIENT_ID, PLAID_SECRET and PLAID_ENV."""
        return cls(
            client_id=os.environ.get("PLAID_CLIENT_ID"),
            secret=os.environ.get("PLAID_SECRET"),
            environment=os.environ.get("PLAID_ENV", "sandbox"),
        )
