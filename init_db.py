#!/usr/bin/env python3
"""
Database initialization script for the Kanban Board API.

Usage:
    python init_db.py
"""

from sqlmodel import SQLModel
from database import engine
from settings import logger
# Import models so their tables are registered on the metadata
from models.boards import Board, Task  # noqa: F401


def init_database():
    """Create all database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


if __name__ == "__main__":
    init_database()
