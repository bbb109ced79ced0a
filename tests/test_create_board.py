"""
Feature: Create a new board
  As a user of the task board
  I want to create a new Kanban board
  So that I can organize tasks

Scenario: Successfully create board with all fields
  When they create a board with name, description and color
  Then the system creates the board successfully
  And returns the board information
  And stores the board in the database

Scenario: Create board with minimal data
  When they create a board with only a name
  Then description and color are empty

Scenario: Board name is trimmed
  When they create a board whose name has surrounding spaces
  Then the stored name is trimmed

Scenario: Create board without a name
  When they create a board with a missing or blank name
  Then the system returns a missing field error
  And does not create the board
"""

import pytest
from sqlmodel import create_engine, Session, SQLModel, select
from models.boards import Board
from apis.boards import create_board
from apis.schemas.boards import CreateBoardRequest
from helpers.errors import MissingFieldError


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.mark.asyncio
async def test_create_board_success(session):
    # When they create a board with all fields
    board_data = CreateBoardRequest(
        name="Launch",
        description="Product launch work",
        color="#ff8800"
    )
    result = await create_board(board_data=board_data, db_session=session)

    # Then the system returns the board information
    assert result.id.startswith("board_")
    assert result.name == "Launch"
    assert result.description == "Product launch work"
    assert result.color == "#ff8800"
    assert result.created_at is not None
    assert result.updated_at is not None

    # And stores the board in the database
    stored = session.exec(select(Board).where(Board.id == result.id)).first()
    assert stored is not None
    assert stored.name == "Launch"


@pytest.mark.asyncio
async def test_create_board_minimal_data(session):
    # When they create a board with only a name
    result = await create_board(board_data=CreateBoardRequest(name="Minimal"), db_session=session)

    # Then description and color are empty
    assert result.name == "Minimal"
    assert result.description is None
    assert result.color is None


@pytest.mark.asyncio
async def test_create_board_name_is_trimmed(session):
    result = await create_board(board_data=CreateBoardRequest(name="  Roadmap  "), db_session=session)

    assert result.name == "Roadmap"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", [None, "", "   "])
async def test_create_board_without_name(session, name):
    # When they create a board with a missing or blank name
    with pytest.raises(MissingFieldError) as exc_info:
        await create_board(board_data=CreateBoardRequest(name=name), db_session=session)

    # Then the system returns a missing field error
    assert exc_info.value.kind == "missing_field"
    assert exc_info.value.field == "name"

    # And does not create the board
    assert session.exec(select(Board)).all() == []
