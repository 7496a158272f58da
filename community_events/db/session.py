from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from community_events.core.config import settings

# The engine owns the connection pool; sessions are created per request.
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close, even if the endpoint raised.
        db.close()
