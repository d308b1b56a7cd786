# ABOUTME: Credential manager service for securely storing LinkedIn login credentials.
# ABOUTME: Uses OS keyring for secure storage and maintains a list of account names.

import json
from pathlib import Path
from typing import Any

import keyring
from pydantic import BaseModel, Field, field_validator


class LinkedInCredentials(BaseModel):
    """Email and password used to sign in to LinkedIn."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1, repr=False)

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value


class CredentialManager:
    """Service for managing LinkedIn credential storage using the OS keyring."""

    SERVICE_NAME = "linkedin-networker"
    DEFAULT_ACCOUNTS_FILE = Path.home() / ".linkedin-networker" / "accounts.json"

    def __init__(self, accounts_file: Path | None = None) -> None:
        """Initialize the credential manager.

        Args:
            accounts_file: Path to JSON file storing account names.
                Defaults to ~/.linkedin-networker/accounts.json
        """
        self.accounts_file = (
            accounts_file if accounts_file is not None else self.DEFAULT_ACCOUNTS_FILE
        )

    def store_credentials(
        self, credentials: LinkedInCredentials, account_name: str = "default"
    ) -> None:
        """Store LinkedIn credentials in the OS keyring.

        Args:
            credentials: The email and password to store.
            account_name: Name to identify this account. Defaults to "default".
        """
        payload = json.dumps({"email": credentials.email, "password": credentials.password})
        keyring.set_password(self.SERVICE_NAME, account_name, payload)
        self._add_account_to_list(account_name)

    def get_credentials(self, account_name: str = "default") -> LinkedInCredentials | None:
        """Retrieve LinkedIn credentials from the OS keyring.

        Args:
            account_name: Name of the account to retrieve. Defaults to "default".

        Returns:
            The stored credentials, or None if nothing usable is stored.
        """
        stored = keyring.get_password(self.SERVICE_NAME, account_name)
        if stored is None:
            return None

        try:
            data = json.loads(stored)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict) or "email" not in data or "password" not in data:
            return None
        return LinkedInCredentials(email=data["email"], password=data["password"])

    def delete_credentials(self, account_name: str = "default") -> None:
        """Delete LinkedIn credentials from the OS keyring.

        Args:
            account_name: Name of the account to delete. Defaults to "default".
        """
        keyring.delete_password(self.SERVICE_NAME, account_name)
        self._remove_account_from_list(account_name)

    def list_accounts(self) -> list[str]:
        """List all stored account names."""
        return self._load_accounts()

    def _load_accounts(self) -> list[str]:
        """Load account names from the accounts file.

        Returns:
            List of account names, or empty list if file doesn't exist or is empty/invalid.
        """
        if not self.accounts_file.exists():
            return []

        try:
            content = self.accounts_file.read_text().strip()
            if not content:
                return []
            data: dict[str, Any] = json.loads(content)
            accounts = data.get("accounts", [])
            if isinstance(accounts, list):
                return [str(acc) for acc in accounts]
            return []
        except (json.JSONDecodeError, OSError):
            return []

    def _save_accounts(self, accounts: list[str]) -> None:
        self.accounts_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.accounts_file, "w") as f:
            json.dump({"accounts": accounts}, f, indent=2)

    def _add_account_to_list(self, account_name: str) -> None:
        accounts = self._load_accounts()
        if account_name not in accounts:
            accounts.append(account_name)
            self._save_accounts(accounts)

    def _remove_account_from_list(self, account_name: str) -> None:
        accounts = self._load_accounts()
        if account_name in accounts:
            accounts.remove(account_name)
            self._save_accounts(accounts)
