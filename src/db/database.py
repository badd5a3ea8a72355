"""Generate database session"""

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

from src.core import config
from src.db.schema import Base

if config.DATABASE_URL.startswith("sqlite"):
    # a single shared connection, otherwise every session would see its own empty in-memory database
    engine = create_engine(
        config.DATABASE_URL,
        echo=config.DATABASE_ECHO,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)
