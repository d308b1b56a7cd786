# ABOUTME: Auth package for LinkedIn account credential management.
# ABOUTME: Provides CredentialManager for secure credential storage using OS keyring.

from linkedin_networker.auth.credential_manager import CredentialManager, LinkedInCredentials

__all__ = ["CredentialManager", "LinkedInCredentials"]
