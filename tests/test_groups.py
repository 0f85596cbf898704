"""Tests for QueryGroup construction."""

from __future__ import annotations

import dataclasses

import pytest

from analysis.groups import QueryGroup
from common.errors import InvalidQueryGroup


class TestQueryGroupBuild:
    """Tests for QueryGroup.build."""

    def test_mean_and_max_over_records(self, make_record) -> None:
        """Three 'up' records with 1, 2, 3 seconds average to 2 with the third as max."""
        recs = [make_record("up", exec_time=t) for t in (1.0, 2.0, 3.0)]

        group = QueryGroup.build("up", recs)

        assert group.avg_execution_time == pytest.approx(2.0)
        assert group.max_execution_time_record is recs[2]
        assert group.count == 3

    def test_sample_statistics(self, make_record) -> None:
        """Sample means and maxima are tracked independently."""
        recs = [
            make_record(total_samples=10, peak_samples=9),
            make_record(total_samples=30, peak_samples=1),
            make_record(total_samples=20, peak_samples=2),
        ]

        group = QueryGroup.build("up", recs)

        assert group.avg_total_queryable_samples == pytest.approx(20.0)
        assert group.avg_peak_samples == pytest.approx(4.0)
        assert group.max_total_queryable_samples_record is recs[1]
        assert group.max_peak_samples_record is recs[0]

    def test_ties_keep_first_record(self, make_record) -> None:
        """Equal maxima resolve to the earliest record."""
        recs = [
            make_record(exec_time=1.0),
            make_record(exec_time=5.0),
            make_record(exec_time=5.0),
        ]

        group = QueryGroup.build("up", recs)

        assert group.max_execution_time_record is recs[1]

    def test_all_zero_samples_point_at_first(self, make_record) -> None:
        """Zero counts are legitimate values; the first record wins the tie."""
        recs = [make_record(), make_record()]

        group = QueryGroup.build("up", recs)

        assert group.max_peak_samples_record is recs[0]
        assert group.avg_peak_samples == 0.0

    def test_empty_query_rejected(self, make_record) -> None:
        """A group needs a query text."""
        with pytest.raises(InvalidQueryGroup):
            QueryGroup.build("", [make_record()])

    def test_no_records_rejected(self) -> None:
        """A group with zero records is an error, not an empty aggregate."""
        with pytest.raises(InvalidQueryGroup):
            QueryGroup.build("up", [])

    def test_group_is_immutable(self, make_record) -> None:
        """Statistics cannot be changed after construction."""
        group = QueryGroup.build("up", [make_record(exec_time=1.0)])

        with pytest.raises(dataclasses.FrozenInstanceError):
            group.avg_execution_time = 9.0  # type: ignore[misc]

    def test_rule_group_of_first_record(self, make_record) -> None:
        """Row annotation comes from the first record only."""
        group = QueryGroup.build(
            "up", [make_record(), make_record(rule_group="late-rules")]
        )

        assert group.rule_group_name is None

        group = QueryGroup.build("up", [make_record(rule_group="node-rules")])

        assert group.rule_group_name == "node-rules"
