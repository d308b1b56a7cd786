# ABOUTME: Tests for the credential manager service module.
# ABOUTME: Covers credential validation, keyring storage and account list management.

import json
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from linkedin_networker.auth import CredentialManager, LinkedInCredentials


@pytest.fixture
def temp_accounts_file(tmp_path: Path) -> Path:
    """Return an accounts file path that does not exist yet."""
    return tmp_path / "accounts.json"


@pytest.fixture
def mock_keyring() -> Generator[MagicMock, None, None]:
    """Patch the keyring module used by the credential manager."""
    with patch("linkedin_networker.auth.credential_manager.keyring") as mock:
        mock.get_password = MagicMock(return_value=None)
        mock.set_password = MagicMock()
        mock.delete_password = MagicMock()
        yield mock


@pytest.fixture
def credential_manager(temp_accounts_file: Path, mock_keyring: MagicMock) -> CredentialManager:
    """Create a CredentialManager instance with mocked dependencies."""
    return CredentialManager(accounts_file=temp_accounts_file)


class TestLinkedInCredentials:
    """Tests for the credentials model."""

    def test_email_is_stripped(self) -> None:
        """Test that surrounding whitespace is removed from the email."""
        creds = LinkedInCredentials(email="  user@example.com ", password="pw")
        assert creds.email == "user@example.com"

    def test_email_without_at_sign_rejected(self) -> None:
        """Test that an email without '@' fails validation."""
        with pytest.raises(ValidationError):
            LinkedInCredentials(email="user.example.com", password="pw")

    def test_empty_password_rejected(self) -> None:
        """Test that an empty password fails validation."""
        with pytest.raises(ValidationError):
            LinkedInCredentials(email="user@example.com", password="")

    def test_password_hidden_from_repr(self) -> None:
        """Test that the password never appears in the model repr."""
        creds = LinkedInCredentials(email="user@example.com", password="hunter2")
        assert "hunter2" not in repr(creds)


class TestCredentialManagerInit:
    """Tests for CredentialManager initialization."""

    def test_init_with_custom_accounts_file(
        self, temp_accounts_file: Path, mock_keyring: MagicMock
    ) -> None:
        """Test that CredentialManager accepts a custom accounts file path."""
        manager = CredentialManager(accounts_file=temp_accounts_file)
        assert manager.accounts_file == temp_accounts_file

    def test_init_with_default_accounts_file(self, mock_keyring: MagicMock) -> None:
        """Test that CredentialManager uses the default path when none is provided."""
        manager = CredentialManager()
        assert manager.accounts_file == Path.home() / ".linkedin-networker" / "accounts.json"


class TestStoreCredentials:
    """Tests for storing credentials."""

    def test_store_writes_json_payload(
        self, credential_manager: CredentialManager, mock_keyring: MagicMock
    ) -> None:
        """Test that email and password are stored together under the account name."""
        creds = LinkedInCredentials(email="user@example.com", password="pw")
        credential_manager.store_credentials(creds, account_name="work")

        service, account, payload = mock_keyring.set_password.call_args.args
        assert service == "linkedin-networker"
        assert account == "work"
        assert json.loads(payload) == {"email": "user@example.com", "password": "pw"}

    def test_store_adds_account_once(
        self, credential_manager: CredentialManager, temp_accounts_file: Path
    ) -> None:
        """Test that storing the same account twice lists it once."""
        creds = LinkedInCredentials(email="user@example.com", password="pw")
        credential_manager.store_credentials(creds)
        credential_manager.store_credentials(creds)

        data = json.loads(temp_accounts_file.read_text())
        assert data == {"accounts": ["default"]}


class TestGetCredentials:
    """Tests for retrieving credentials."""

    def test_returns_none_when_missing(self, credential_manager: CredentialManager) -> None:
        """Test that an unknown account yields None."""
        assert credential_manager.get_credentials("nobody") is None

    def test_returns_stored_credentials(
        self, credential_manager: CredentialManager, mock_keyring: MagicMock
    ) -> None:
        """Test that a stored payload is parsed back into credentials."""
        mock_keyring.get_password.return_value = json.dumps(
            {"email": "user@example.com", "password": "pw"}
        )
        creds = credential_manager.get_credentials()
        assert creds == LinkedInCredentials(email="user@example.com", password="pw")

    @pytest.mark.parametrize("stored", ["not json", json.dumps({"email": "a@b.c"}), "[1, 2]"])
    def test_unusable_payload_returns_none(
        self, credential_manager: CredentialManager, mock_keyring: MagicMock, stored: str
    ) -> None:
        """Test that malformed or incomplete payloads are treated as missing."""
        mock_keyring.get_password.return_value = stored
        assert credential_manager.get_credentials() is None


class TestAccountList:
    """Tests for account list management."""

    def test_list_accounts_empty_when_file_missing(
        self, credential_manager: CredentialManager
    ) -> None:
        """Test that a missing accounts file yields an empty list."""
        assert credential_manager.list_accounts() == []

    def test_list_accounts_tolerates_invalid_json(
        self, credential_manager: CredentialManager, temp_accounts_file: Path
    ) -> None:
        """Test that a corrupted accounts file yields an empty list."""
        temp_accounts_file.write_text("{broken")
        assert credential_manager.list_accounts() == []

    def test_delete_removes_account(
        self, credential_manager: CredentialManager, mock_keyring: MagicMock
    ) -> None:
        """Test that deleting credentials clears the keyring entry and the list."""
        creds = LinkedInCredentials(email="user@example.com", password="pw")
        credential_manager.store_credentials(creds, account_name="a")
        credential_manager.store_credentials(creds, account_name="b")

        credential_manager.delete_credentials("a")

        mock_keyring.delete_password.assert_called_once_with("linkedin-networker", "a")
        assert credential_manager.list_accounts() == ["b"]
