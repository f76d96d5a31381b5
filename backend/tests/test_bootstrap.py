import pytest
from sqlalchemy import create_engine, text

from courseguide.db import bootstrap


def _raise_error(message: str):
    raise RuntimeError(message)


def test_runtime_schema_bootstrap_raises_on_validation_failure(monkeypatch):
    monkeypatch.setattr(bootstrap.Base.metadata, "create_all", lambda bind: None)
    monkeypatch.setattr(
        bootstrap,
        "_assert_required_columns",
        lambda: _raise_error("missing required schema"),
    )

    with pytest.raises(RuntimeError, match="Runtime schema compatibility bootstrap failed"):
        bootstrap.ensure_runtime_schema_compatibility()


def test_find_schema_gaps_reports_missing_tables_and_columns(engine):
    with engine.begin() as connection:
        assert bootstrap.find_schema_gaps(connection) == ([], {})

    legacy = create_engine("sqlite+pysqlite://")
    with legacy.begin() as connection:
        connection.execute(text("CREATE TABLE buildings (id VARCHAR(36) PRIMARY KEY, name VARCHAR(75))"))
        missing_tables, missing_columns = bootstrap.find_schema_gaps(connection)

    assert "buildings" not in missing_tables
    assert "guidelines" in missing_tables
    assert missing_columns == {"buildings": ["prefix"]}
