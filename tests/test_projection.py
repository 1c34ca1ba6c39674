"""Tests for row projection."""

from arc_table.dataset.projection import (
    ProjectionOutcome,
    RequiredFieldsPredicate,
    RowProjector,
    sort_discovered_columns,
)


class TestRequiredFieldsPredicate:
    """Named, configurable required-field policy."""

    def test_default_requires_value(self) -> None:
        predicate = RequiredFieldsPredicate()
        assert predicate({"value": 0})
        assert not predicate({"value": None})
        assert not predicate({"name": "x"})
        assert predicate.missing({"name": "x"}) == ["value"]

    def test_empty_policy_accepts_everything(self) -> None:
        assert RequiredFieldsPredicate([])({})


class TestRowProjector:
    """Exclusion, required fields and column selection."""

    def test_excluded_types_are_counted(self) -> None:
        projector = RowProjector(columns=["id"], exclude_types=frozenset({"Cosmetic", "Key"}))
        rows = [
            {"id": "a", "type": "Cosmetic", "value": 1},
            {"id": "b", "type": "Key", "value": None},
            {"id": "c", "type": "Weapon", "value": 1},
            {"id": "d", "value": 1},
        ]
        outcomes = [projector.project(row) for row in rows]
        assert outcomes == [
            ProjectionOutcome.SKIPPED_BY_TYPE,
            ProjectionOutcome.SKIPPED_BY_TYPE,
            ProjectionOutcome.KEPT,
            ProjectionOutcome.KEPT,
        ]
        assert projector.skipped_by_type == 2
        assert projector.skipped_by_required_field == 0

    def test_required_field_drop_is_counted_separately(self) -> None:
        projector = RowProjector(columns=["id"])
        assert projector.project({"id": "a"}) is ProjectionOutcome.SKIPPED_BY_REQUIRED_FIELD
        assert projector.skipped_by_required_field == 1
        assert projector.rows == []

    def test_policy_can_be_disabled(self) -> None:
        projector = RowProjector(columns=["id"], required=RequiredFieldsPredicate([]))
        assert projector.project({"id": "a"}) is ProjectionOutcome.KEPT

    def test_columns_keep_config_order_and_omit_absent(self) -> None:
        projector = RowProjector(columns=["value", "name", "id", "weightKg"])
        projector.project({"id": "a", "name": "A", "value": 3, "junk": True})
        rows, columns = projector.finalize()
        assert rows == [{"value": 3, "name": "A", "id": "a"}]
        assert list(rows[0]) == ["value", "name", "id"]
        assert columns == ["value", "name", "id", "weightKg"]

    def test_discovery_mode(self) -> None:
        projector = RowProjector(columns=None)
        projector.project({"zeta": 1, "value": 2, "id": "a", "alpha": 3})
        projector.project({"stackSize": 5, "name": "B", "value": 1, "beta": 0})
        rows, columns = projector.finalize()
        assert columns == ["id", "name", "value", "stackSize", "alpha", "beta", "zeta"]
        assert list(rows[0]) == ["id", "value", "alpha", "zeta"]
        assert list(rows[1]) == ["name", "value", "stackSize", "beta"]


class TestSortDiscoveredColumns:
    def test_priority_prefix_then_alphabetical(self) -> None:
        keys = ["weightKg", "b", "rarity", "a", "type", "id", "stackSize", "name", "value"]
        assert sort_discovered_columns(keys) == [
            "id", "name", "type", "rarity", "value", "weightKg", "stackSize", "a", "b",
        ]
