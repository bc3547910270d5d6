"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from stockmind.config import settings

Base = declarative_base()


def build_engine(database_url: str, environment: str = "development") -> Engine:
    """
    Create an engine suited to the database URL and deployment.

    Args:
        database_url: SQLAlchemy connection URL
        environment: Deployment environment name

    Returns:
        Configured SQLAlchemy engine
    """
    echo = environment == "development"

    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    # Use NullPool for serverless/auto-scaling deployments behind a pooler
    if environment in ("development", "production"):
        if "pooler.supabase.com" in database_url or database_url.endswith(":6543"):
            return create_engine(
                database_url,
                poolclass=NullPool,  # Required for pooler connections
                echo=echo,
            )
        # Direct connection for stationary servers
        return create_engine(
            database_url,
            pool_size=20,
            max_overflow=10,
            echo=echo,
        )

    return create_engine(database_url, poolclass=NullPool, echo=False)


def build_session_factory(bind: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.database_url, settings.environment)
SessionLocal = build_session_factory(engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine = None) -> None:
    """Create all tables (development and tests only; production uses migrations)."""
    # Import models so they register on Base.metadata
    import stockmind.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
