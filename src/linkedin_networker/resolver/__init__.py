# ABOUTME: Resolver package reconciling extracted entities with the session store.
# ABOUTME: Exports EntityResolver and the fallback-name helpers.

from linkedin_networker.resolver.service import (
    EntityResolver,
    connection_path,
    synthesize_connection_name,
)

__all__ = ["EntityResolver", "connection_path", "synthesize_connection_name"]
