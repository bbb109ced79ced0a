"""
Feature: List boards
  As a user of the task board
  I want to see all boards
  So that I can pick one to work on

Scenario: Successfully list all boards
  Given there are boards in the system
  When they request the board list with GET /boards
  Then the system returns all boards, newest first

Scenario: List boards when none exist
  Given no boards exist in the system
  When they request the board list
  Then the system returns an empty list
"""

import pytest
from sqlmodel import create_engine, Session, SQLModel
from models.boards import Board
from apis.boards import list_boards
from datetime import datetime, timezone, timedelta


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.mark.asyncio
async def test_list_boards_newest_first(session):
    # Given there are boards in the system
    now = datetime.now(timezone.utc)
    oldest = Board(name="Oldest", created_at=now - timedelta(days=2))
    newest = Board(name="Newest", created_at=now)
    middle = Board(name="Middle", created_at=now - timedelta(days=1))
    session.add_all([oldest, newest, middle])
    session.commit()

    # When they request the board list
    result = await list_boards(db_session=session)

    # Then the system returns all boards, newest first
    assert [board.name for board in result] == ["Newest", "Middle", "Oldest"]


@pytest.mark.asyncio
async def test_list_boards_empty_list(session):
    result = await list_boards(db_session=session)

    assert result == []
    assert isinstance(result, list)
