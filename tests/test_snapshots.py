"""
Tests for saved input snapshots and the calculator session.
"""

import logging
import pytest

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from strcalc.calculations.metrics import DEFAULT_INPUTS, default_inputs
from strcalc.db.models import InputSnapshot
from strcalc.services.session import CalculatorSession
from strcalc.services.snapshots import (
    MemorySnapshotStore,
    SqlSnapshotStore,
    parse_snapshot,
)


class TestParseSnapshot:
    """Test interpretation of stored records."""

    def test_missing_uses_defaults(self):
        assert parse_snapshot(None) == DEFAULT_INPUTS

    def test_partial_record_merges_over_defaults(self):
        inputs = parse_snapshot({"propertyValue": "300000", "occupancyRate": "60"})
        assert inputs["property_value"] == 300000.0
        assert inputs["occupancy_rate"] == 60.0
        assert inputs["interest_rate"] == DEFAULT_INPUTS["interest_rate"]

    def test_json_text(self):
        inputs = parse_snapshot('{"property_value": 310000}')
        assert inputs["property_value"] == 310000.0

    def test_unreadable_text(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_snapshot("{not json") == DEFAULT_INPUTS
        assert "unreadable" in caplog.text

    @pytest.mark.parametrize("raw", [[1, 2, 3], "[1, 2]", 42, "null"])
    def test_non_object_records(self, raw):
        assert parse_snapshot(raw) == DEFAULT_INPUTS

    def test_bad_field_values_become_zero(self):
        inputs = parse_snapshot({"insurance": "lots"})
        assert inputs["insurance"] == 0.0


class TestMemorySnapshotStore:
    """Test the in-process store."""

    def test_save_then_load(self):
        store = MemorySnapshotStore()
        inputs = default_inputs()
        inputs["property_value"] = 425000.0
        store.save(inputs)
        assert store.load() == inputs
        assert store.saves == 1

    def test_malformed_initial_data(self):
        assert MemorySnapshotStore(initial="{broken").load() == DEFAULT_INPUTS


class TestSqlSnapshotStore:
    """Test the database-backed store."""

    def test_load_without_row(self, sql_store):
        assert sql_store.load() == DEFAULT_INPUTS

    def test_save_then_load(self, sql_store):
        inputs = default_inputs()
        inputs["avg_nightly_rate"] = 275.0
        sql_store.save(inputs)
        assert sql_store.load()["avg_nightly_rate"] == 275.0

    def test_save_overwrites(self, sql_store, db_session):
        sql_store.save(default_inputs())
        sql_store.save({**default_inputs(), "insurance": 1800.0})

        rows = db_session.query(InputSnapshot).all()
        assert len(rows) == 1
        assert rows[0].key == "test-inputs"
        assert rows[0].data["insurance"] == 1800.0

    def test_malformed_row(self, sql_store, db_session):
        db_session.add(InputSnapshot(key="test-inputs", data=["not", "an", "object"]))
        db_session.commit()
        assert sql_store.load() == DEFAULT_INPUTS

    def test_row_with_non_json_text(self, sql_store, db_session, caplog):
        """A data column holding text that is not JSON loads defaults."""
        sql_store.save({**default_inputs(), "insurance": 1800.0})
        db_session.execute(text("UPDATE input_snapshots SET data = 'not json{'"))
        db_session.commit()

        with caplog.at_level(logging.WARNING):
            assert sql_store.load() == DEFAULT_INPUTS
        assert "Could not read input snapshot" in caplog.text

    def test_unreachable_database_falls_back(self, caplog):
        """A database without the table loads defaults instead of raising."""
        engine = create_engine("sqlite:///:memory:")
        store = SqlSnapshotStore(session_factory=sessionmaker(bind=engine), key="x")
        with caplog.at_level(logging.WARNING):
            assert store.load() == DEFAULT_INPUTS
        assert "Could not read input snapshot" in caplog.text


class TestCalculatorSession:
    """Test field-by-field editing and result reuse."""

    def test_starts_from_defaults(self):
        assert CalculatorSession().inputs == DEFAULT_INPUTS

    def test_update_merges_fields(self):
        session = CalculatorSession()
        session.update({"propertyValue": "300000", "unknown": "1"})
        assert session.inputs["property_value"] == 300000.0
        assert session.inputs["interest_rate"] == DEFAULT_INPUTS["interest_rate"]
        assert "unknown" not in session.inputs

    def test_update_coerces_bad_values(self):
        session = CalculatorSession()
        session.update({"insurance": "n/a"})
        assert session.inputs["insurance"] == 0.0

    def test_replace_and_reset(self):
        session = CalculatorSession({"property_value": 1})
        session.replace({"insurance": 500})
        assert session.inputs["insurance"] == 500.0
        assert session.inputs["property_value"] == DEFAULT_INPUTS["property_value"]

        session.update({"insurance": 900})
        session.reset()
        assert session.inputs == DEFAULT_INPUTS

    def test_metrics_are_reused_until_inputs_change(self):
        session = CalculatorSession()
        first = session.metrics()
        assert session.metrics() is first
        assert session.computations == 1

        # Same value again is not a change
        session.update({"property_value": DEFAULT_INPUTS["property_value"]})
        assert session.metrics() is first

        session.update({"property_value": 300000})
        assert session.metrics() is not first
        assert session.computations == 2

    def test_inputs_property_is_a_copy(self):
        session = CalculatorSession()
        session.inputs["property_value"] = 1
        assert session.inputs["property_value"] == DEFAULT_INPUTS["property_value"]
