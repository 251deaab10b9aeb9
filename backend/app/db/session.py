from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.exceptions import ConfigurationError

settings = get_settings()


def build_engine(database_url: str):
    if not database_url.strip():
        raise ConfigurationError("DATABASE_URL is not configured")
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
