# ABOUTME: Database service for managing SQLite connections and CRUD operations.
# ABOUTME: Persists crawl sessions, companies, connections and their junction rows.

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from uuid import UUID

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, col, create_engine, or_, select

from linkedin_networker.database.exceptions import (
    InvalidRecordError,
    SessionNotFoundError,
    SessionStateError,
)
from linkedin_networker.models import (
    Company,
    CompanyConnection,
    CompanyConnectionResult,
    Connection,
    CrawlMode,
    CrawlSession,
    CrawlStatus,
)

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _as_uuid(value: UUID | str) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class DatabaseService:
    """Service for managing database connections and operations."""

    DEFAULT_DB_PATH = Path.home() / ".linkedin-networker" / "linkedin-networker.db"

    # (table, column, SQL type) added to store files created by older versions.
    ADDITIVE_COLUMNS: tuple[tuple[str, str, str], ...] = (
        ("connections", "profile_image_url", "TEXT"),
        ("connections", "connection_source", "TEXT"),
    )

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file.
                Defaults to ~/.linkedin-networker/linkedin-networker.db
        """
        self.db_path = db_path if db_path is not None else self.DEFAULT_DB_PATH
        self._engine = create_engine(f"sqlite:///{self.db_path}", echo=False)
        event.listen(self._engine, "connect", _enable_foreign_keys)

    def init_db(self) -> None:
        """Create tables and parent directories, then apply additive migrations.

        Safe to run on every start: existing tables are left alone and columns
        are only added when missing.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self._engine)
        self._run_migrations()

    def _run_migrations(self) -> None:
        with self._engine.begin() as conn:
            for table, column, sql_type in self.ADDITIVE_COLUMNS:
                rows = conn.exec_driver_sql(f"PRAGMA table_info({table})").fetchall()
                existing = {row[1] for row in rows}
                if column not in existing:
                    logger.info("Adding %s column to %s table", column, table)
                    conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {column} {sql_type}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session as a context manager.

        Yields:
            SQLModel Session for database operations.
        """
        with Session(self._engine) as session:
            yield session

    # Crawl sessions

    def create_crawl_session(self, mode: CrawlMode) -> CrawlSession:
        """Create a new pending crawl session.

        Args:
            mode: Which crawl pipeline the session will run.

        Returns:
            The saved CrawlSession with ID populated.
        """
        crawl_session = CrawlSession(mode=mode, status=CrawlStatus.PENDING, progress=0)
        with self.get_session() as session:
            session.add(crawl_session)
            session.commit()
            session.refresh(crawl_session)
            return crawl_session

    def get_crawl_session(self, session_id: UUID | str) -> CrawlSession | None:
        """Retrieve a crawl session by ID.

        Args:
            session_id: The session UUID or its string form.

        Returns:
            The CrawlSession if found, None otherwise (including malformed IDs).
        """
        key = _as_uuid(session_id)
        if key is None:
            return None
        with self.get_session() as session:
            return session.get(CrawlSession, key)

    def list_crawl_sessions(self) -> list[CrawlSession]:
        """Retrieve all crawl sessions, newest first."""
        with self.get_session() as session:
            statement = select(CrawlSession).order_by(col(CrawlSession.created_at).desc())
            return list(session.exec(statement).all())

    def update_crawl_session(
        self,
        session_id: UUID | str,
        *,
        status: CrawlStatus | None = None,
        progress: int | None = None,
        total_connections: int | None = None,
        processed_connections: int | None = None,
        error: str | None = None,
    ) -> CrawlSession:
        """Apply changes to a crawl session that has not finished yet.

        Only arguments that are not None are written.

        Args:
            session_id: The session to update.
            status: New lifecycle status.
            progress: New progress value, clamped to 0-100.
            total_connections: Number of items the crawl expects to process.
            processed_connections: Number of items processed so far.
            error: Error text for a failed session.

        Returns:
            The updated CrawlSession.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionStateError: If the session already completed or failed.
        """
        key = _as_uuid(session_id)
        with self.get_session() as session:
            crawl_session = session.get(CrawlSession, key) if key is not None else None
            if crawl_session is None:
                raise SessionNotFoundError(f"Crawl session '{session_id}' not found")
            if crawl_session.is_terminal:
                raise SessionStateError(
                    f"Crawl session '{session_id}' is {crawl_session.status.value} "
                    "and can no longer change"
                )

            if status is not None:
                crawl_session.status = status
            if progress is not None:
                crawl_session.progress = max(0, min(100, int(progress)))
            if total_connections is not None:
                crawl_session.total_connections = total_connections
            if processed_connections is not None:
                crawl_session.processed_connections = processed_connections
            if error is not None:
                crawl_session.error = error

            session.add(crawl_session)
            session.commit()
            session.refresh(crawl_session)
            return crawl_session

    def delete_crawl_session(self, session_id: UUID | str) -> bool:
        """Delete a crawl session together with its connections and links.

        Companies are a shared cache and are kept.

        Args:
            session_id: The session to delete.

        Returns:
            True if a session was deleted, False if it did not exist.
        """
        key = _as_uuid(session_id)
        if key is None:
            return False
        with self.get_session() as session:
            crawl_session = session.get(CrawlSession, key)
            if crawl_session is None:
                return False

            # Older store files may predate the ON DELETE CASCADE constraints.
            for model in (CompanyConnection, Connection):
                statement = select(model).where(model.crawl_session_id == key)
                for row in session.exec(statement).all():
                    session.delete(row)
                session.flush()
            session.delete(crawl_session)
            session.commit()
            return True

    # Companies

    def get_company_by_url(self, linkedin_url: str) -> Company | None:
        """Retrieve a company by its canonical LinkedIn URL."""
        with self.get_session() as session:
            statement = select(Company).where(Company.linkedin_url == linkedin_url)
            return session.exec(statement).first()

    def upsert_company(
        self,
        name: str,
        linkedin_url: str,
        logo_url: str | None = None,
        description: str | None = None,
    ) -> Company:
        """Return the company stored under a URL, creating it if needed.

        An existing row is returned unchanged; its identifier is stable across
        sessions.

        Args:
            name: Company display name.
            linkedin_url: Canonical company URL, the dedupe key.
            logo_url: Optional logo image URL.
            description: Optional free-text description.

        Returns:
            The existing or newly created Company.

        Raises:
            InvalidRecordError: If the URL is empty.
        """
        if not linkedin_url or not linkedin_url.strip():
            raise InvalidRecordError(f"Company '{name}' has no LinkedIn URL")

        existing = self.get_company_by_url(linkedin_url)
        if existing is not None:
            return existing

        company = Company(
            name=name,
            linkedin_url=linkedin_url,
            logo_url=logo_url or None,
            description=description or None,
        )
        with self.get_session() as session:
            session.add(company)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                stored = session.exec(
                    select(Company).where(Company.linkedin_url == linkedin_url)
                ).first()
                if stored is None:
                    raise
                return stored
            session.refresh(company)
            return company

    # Connections

    def create_connection(self, connection: Connection) -> Connection:
        """Save a connection.

        Args:
            connection: The Connection to save.

        Returns:
            The saved Connection with ID populated.

        Raises:
            InvalidRecordError: If the name is empty or the degree is not 1 or 2.
        """
        if not connection.name or not connection.name.strip():
            raise InvalidRecordError("Connection name must not be empty")
        if connection.connection_degree not in (1, 2):
            raise InvalidRecordError(
                f"Connection degree must be 1 or 2, got {connection.connection_degree}"
            )

        connection.name = connection.name.strip()
        with self.get_session() as session:
            session.add(connection)
            session.commit()
            session.refresh(connection)
            return connection

    def get_connections_by_session(self, session_id: UUID | str) -> list[Connection]:
        """Retrieve every connection recorded by one crawl session."""
        key = _as_uuid(session_id)
        if key is None:
            return []
        with self.get_session() as session:
            statement = select(Connection).where(Connection.crawl_session_id == key)
            return list(session.exec(statement).all())

    # Company connections

    def create_company_connection(
        self,
        company_id: UUID,
        connection_id: UUID,
        crawl_session_id: UUID,
        connection_path: str,
    ) -> CompanyConnection:
        """Link a connection to a company within its crawl session.

        Raises:
            InvalidRecordError: If the company or connection is missing, or the
                connection belongs to a different session.
        """
        with self.get_session() as session:
            connection = session.get(Connection, connection_id)
            if connection is None:
                raise InvalidRecordError(f"Connection '{connection_id}' not found")
            if connection.crawl_session_id != crawl_session_id:
                raise InvalidRecordError(
                    f"Connection '{connection_id}' belongs to session "
                    f"'{connection.crawl_session_id}', not '{crawl_session_id}'"
                )
            if session.get(Company, company_id) is None:
                raise InvalidRecordError(f"Company '{company_id}' not found")

            link = CompanyConnection(
                company_id=company_id,
                connection_id=connection_id,
                crawl_session_id=crawl_session_id,
                connection_path=connection_path,
            )
            session.add(link)
            session.commit()
            session.refresh(link)
            return link

    def get_company_connections(
        self,
        session_id: UUID | str,
        search: str | None = None,
    ) -> list[CompanyConnectionResult]:
        """Retrieve a session's company-connection links joined to both sides.

        Args:
            session_id: The crawl session to read.
            search: Optional case-insensitive filter matched against the
                connection name and headline, company name and company description.

        Returns:
            Joined rows ordered by company name, then connection name.
        """
        key = _as_uuid(session_id)
        if key is None:
            return []

        statement = (
            select(CompanyConnection, Company, Connection)
            .join(Company, col(CompanyConnection.company_id) == col(Company.id))
            .join(Connection, col(CompanyConnection.connection_id) == col(Connection.id))
            .where(CompanyConnection.crawl_session_id == key)
            .order_by(col(Company.name), col(Connection.name))
        )
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            statement = statement.where(
                or_(
                    col(Connection.name).ilike(pattern),
                    col(Connection.headline).ilike(pattern),
                    col(Company.name).ilike(pattern),
                    col(Company.description).ilike(pattern),
                )
            )

        with self.get_session() as session:
            rows = session.exec(statement).all()
            return [
                CompanyConnectionResult(
                    id=link.id,
                    connection_path=link.connection_path,
                    created_at=link.created_at,
                    company_id=company.id,
                    company_name=company.name,
                    company_linkedin_url=company.linkedin_url,
                    company_logo_url=company.logo_url,
                    company_description=company.description,
                    connection_id=connection.id,
                    connection_name=connection.name,
                    connection_headline=connection.headline,
                    connection_profile_url=connection.profile_url,
                    connection_profile_image_url=connection.profile_image_url,
                    connection_source=connection.connection_source,
                    connection_degree=connection.connection_degree,
                )
                for link, company, connection in rows
            ]
