# ABOUTME: Database statistics functionality for the status command.
# ABOUTME: Provides aggregated counts of sessions, companies, connections and links.

from typing import Any

from sqlmodel import func, select

from linkedin_networker.database.service import DatabaseService
from linkedin_networker.models import Company, CompanyConnection, Connection, CrawlSession


def get_database_stats(db_service: DatabaseService) -> dict[str, Any]:
    """Get statistics about everything stored in the database.

    Args:
        db_service: The DatabaseService instance to query.

    Returns:
        Dictionary containing:
            - total_sessions: Number of crawl sessions
            - sessions_by_status: Dict mapping status value to count
            - total_companies: Number of cached companies (shared across sessions)
            - total_connections: Number of stored connections
            - total_links: Number of company-connection links
            - degree_distribution: Dict mapping degree (1, 2) to count
    """
    with db_service.get_session() as session:
        total_sessions = session.exec(select(func.count()).select_from(CrawlSession)).one()

        status_stmt = select(CrawlSession.status, func.count()).group_by(
            CrawlSession.status  # type: ignore[arg-type]
        )
        sessions_by_status = {
            status.value if hasattr(status, "value") else str(status): count
            for status, count in session.exec(status_stmt).all()
        }

        total_companies = session.exec(select(func.count()).select_from(Company)).one()
        total_connections = session.exec(select(func.count()).select_from(Connection)).one()
        total_links = session.exec(select(func.count()).select_from(CompanyConnection)).one()

        degree_stmt = select(Connection.connection_degree, func.count()).group_by(
            Connection.connection_degree  # type: ignore[arg-type]
        )
        degree_distribution = dict(session.exec(degree_stmt).all())

    return {
        "total_sessions": total_sessions,
        "sessions_by_status": sessions_by_status,
        "total_companies": total_companies,
        "total_connections": total_connections,
        "total_links": total_links,
        "degree_distribution": degree_distribution,
    }
