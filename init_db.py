"""Initialize the database by creating all tables defined in the models"""
from database import Base, engine
import models  # noqa: F401  registers the tables on Base.metadata


def init_db():
    print("Creating tables on the database...")
    Base.metadata.create_all(bind=engine)
    print("Tables created:", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    init_db()
