"""Initialize the database - creates all forum tables."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from forum.database import engine, Base
import forum.models  # noqa: F401 - registers all models


def init_db():
    print("Creating all forum tables...")
    Base.metadata.create_all(bind=engine)
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
