"""
Note Pad API: Configuration, Schema Helpers & Startup Tests
============================================================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import QueuePool

from notepad.config import Settings
from notepad.database import create_db_engine
from notepad.main import create_app
from notepad.routes.notes import _coerce_non_negative
from notepad.schemas.note import NoteUpdate


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        s = Settings(_env_file=None)

        assert s.database_url.startswith("postgresql+asyncpg://")
        assert s.db_pool_size == 5
        assert s.backend_port == 8080
        assert s.default_list_limit == 10
        assert s.default_list_offset == 0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BACKEND_PORT", "9090")
        monkeypatch.setenv("DB_POOL_SIZE", "3")

        s = Settings(_env_file=None)

        assert s.backend_port == 9090
        assert s.db_pool_size == 3

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")


class TestListParamCoercion:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 10),
            ("5", 5),
            ("0", 0),
            ("abc", 10),
            ("2.5", 10),
            ("-1", 10),
            ("+5", 10),
            (" 5 ", 10),
            ("1_000", 10),
            ("2147483647", 2147483647),
            ("2147483648", 10),
            ("99999999999999999999999", 10),
        ],
    )
    def test_coerce(self, raw, expected):
        assert _coerce_non_negative(raw, 10) == expected


class TestEnginePool:

    def test_pool_is_bounded_with_no_overflow(self):
        engine = create_db_engine(
            Settings(database_url="postgresql+asyncpg://u:p@localhost:5432/note_pad")
        )

        pool = engine.sync_engine.pool
        assert isinstance(pool, QueuePool)
        assert pool.size() == 5
        assert pool._max_overflow == 0

    def test_pool_size_follows_environment(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_SIZE", "3")
        settings = Settings(
            _env_file=None,
            database_url="postgresql+asyncpg://u:p@localhost:5432/note_pad",
        )

        engine = create_db_engine(settings)

        assert engine.sync_engine.pool.size() == 3
        assert engine.sync_engine.pool._max_overflow == 0


class TestNoteUpdateChanges:

    def test_absent_fields_are_left_out(self):
        assert NoteUpdate.model_validate({"title": "C"}).changes() == {"title": "C"}

    def test_empty_payload_changes_nothing(self):
        assert NoteUpdate.model_validate({}).changes() == {}

    def test_empty_string_is_a_change(self):
        assert NoteUpdate.model_validate({"content": ""}).changes() == {"content": ""}

    def test_null_is_treated_as_absent(self):
        payload = NoteUpdate.model_validate({"title": None, "content": "D"})
        assert payload.changes() == {"content": "D"}


class TestStartup:

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_startup(self, tmp_path):
        settings = Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'notes.db'}",
            log_level="WARNING",
        )
        app = create_app(settings)

        with pytest.raises(OperationalError):
            async with app.router.lifespan_context(app):
                pass

    @pytest.mark.asyncio
    async def test_lifespan_stores_pool_on_app_state(self, notes_app, sqlite_settings):
        assert notes_app.state.settings is sqlite_settings
        assert notes_app.state.engine is not None
        assert notes_app.state.session_factory is not None
