"""Unit tests for the public API functions and the fluent ElementsAssertion."""

from __future__ import annotations

import pytest
from _correspondences import PARSES_TO, RECORDS_CLOSE, WITHIN_10_OF, record, record_id

from correspondence_diff import (
    ContainmentMode,
    Correspondence,
    CorrespondenceAssertionError,
    MatchConfig,
    Verdict,
    assert_elements,
    check_elements,
    correspond_any,
    correspond_at_least,
    correspond_exactly,
)


class TestCheckElements:
    """Tests for the check_elements() function."""

    def test_returns_verdict(self) -> None:
        verdict = check_elements([1, 2], [2, 1])
        assert isinstance(verdict, Verdict)
        assert verdict.passed

    def test_default_is_exactly_any_order(self) -> None:
        assert check_elements([3, 1, 2], [1, 2, 3]).passed
        assert not check_elements([1, 2, 3, 4], [1, 2, 3]).passed

    def test_correspondence_passthrough(self) -> None:
        assert check_elements(["+64", "0x80"], [128, 64], PARSES_TO).passed

    def test_config_passthrough(self) -> None:
        config = MatchConfig(mode=ContainmentMode.AT_LEAST, in_order=True)
        assert check_elements(["fee", "+64", "0x80"], [64, 128], PARSES_TO, config).passed
        assert not check_elements(["0x80", "+64"], [64, 128], PARSES_TO, config).passed

    def test_paired_by_single_function(self) -> None:
        verdict = check_elements(
            [record(1, 100), record(2, 211)],
            [record(1, 100), record(2, 200)],
            RECORDS_CLOSE,
            paired_by=record_id,
        )
        assert [item.key for item in verdict.facts][:2] == ["for key", "missing"]

    def test_paired_by_tuple(self) -> None:
        verdict = check_elements(
            [record(1, 100), record(2, 211)],
            [record(1, 100), record(2, 200)],
            RECORDS_CLOSE,
            paired_by=(record_id, record_id),
        )
        assert [item.key for item in verdict.facts][:2] == ["for key", "missing"]

    def test_message_is_aligned(self) -> None:
        verdict = check_elements([101, 65, 35, 190], [30, 60, 90], WITHIN_10_OF)
        assert verdict.message.splitlines()[:2] == ["missing (1)    : 90", "unexpected (2)"]

    def test_no_global_state_between_calls(self) -> None:
        first = check_elements(["+64"], [64, 128], PARSES_TO)
        second = check_elements(["+64"], [64, 128], PARSES_TO)
        assert first == second


class TestBooleanShortcuts:
    """Tests for correspond_exactly(), correspond_at_least() and correspond_any()."""

    def test_correspond_exactly(self) -> None:
        assert correspond_exactly([2, 1], [1, 2]) is True
        assert correspond_exactly([2, 1], [1, 2], in_order=True) is False

    def test_correspond_at_least(self) -> None:
        assert correspond_at_least([5, 2, 1], [1, 2]) is True
        assert correspond_at_least([5, 2, 1], [1, 2], in_order=True) is False
        assert correspond_at_least([1], [1, 1]) is False

    def test_correspond_any(self) -> None:
        assert correspond_any(["x", "+64"], [64, 99], PARSES_TO) is True
        assert correspond_any(["x", "y"], [64, 99], PARSES_TO) is False

    def test_tolerance(self) -> None:
        assert correspond_exactly([1.05, 2.0], [2.02, 1.0], Correspondence.tolerance(0.1))
        assert not correspond_exactly([float("nan")], [float("nan")], Correspondence.tolerance(1))


class TestElementsAssertion:
    """Tests for the fluent assert_elements() chain."""

    def test_contains_exactly_passes(self) -> None:
        assert_elements(["+64", "0x80"]).comparing_elements_using(PARSES_TO).contains_exactly(
            128, 64
        )

    def test_contains_exactly_in_order_raises(self) -> None:
        ordered = assert_elements(["+64", "0x80"]).comparing_elements_using(
            PARSES_TO
        ).contains_exactly(128, 64)
        with pytest.raises(CorrespondenceAssertionError, match="order was wrong"):
            ordered.in_order()

    def test_contains_exactly_failure_carries_facts(self) -> None:
        with pytest.raises(CorrespondenceAssertionError) as info:
            assert_elements(["+64"]).comparing_elements_using(PARSES_TO).contains_exactly(
                64, 128
            )
        assert [item.key for item in info.value.facts] == [
            "missing (1)",
            "---",
            "expected",
            "testing whether",
            "but was",
        ]
        assert isinstance(info.value, AssertionError)

    def test_default_is_equality(self) -> None:
        assert_elements([1, 2, 3]).contains_at_least(3, 1)
        with pytest.raises(CorrespondenceAssertionError) as info:
            assert_elements([1, 2]).contains_exactly(1, 3)
        assert "testing whether" not in str(info.value)

    def test_contains_and_does_not_contain(self) -> None:
        parsed = assert_elements(["+64", "x"]).comparing_elements_using(PARSES_TO)
        parsed.contains(64)
        parsed.does_not_contain(65)
        with pytest.raises(CorrespondenceAssertionError, match="expected to contain"):
            parsed.contains(65)
        with pytest.raises(CorrespondenceAssertionError, match="but contained"):
            parsed.does_not_contain(64)

    def test_any_and_none(self) -> None:
        parsed = assert_elements(["+64", "x"]).comparing_elements_using(PARSES_TO)
        parsed.contains_any_of(1, 64)
        parsed.contains_any_in([64])
        parsed.contains_none_of(1, 2)
        parsed.contains_none_in([1])
        with pytest.raises(CorrespondenceAssertionError, match="expected to contain any of"):
            parsed.contains_any_of(1, 2)
        with pytest.raises(CorrespondenceAssertionError, match="corresponding to"):
            parsed.contains_none_of(1, 64, 3)

    def test_at_least_elements_in(self) -> None:
        parsed = assert_elements(["fee", "+64", "0x80"]).comparing_elements_using(PARSES_TO)
        parsed.contains_at_least_elements_in([64, 128]).in_order()
        with pytest.raises(CorrespondenceAssertionError, match="expected to contain at least"):
            parsed.contains_at_least_elements_in([64, 256])

    def test_formatting_diffs_using(self) -> None:
        with pytest.raises(CorrespondenceAssertionError) as info:
            assert_elements([record(1, 100), record(2, 211)]).formatting_diffs_using(
                lambda a, e: f"score:{a.score - e.score}"
            ).displaying_diffs_paired_by(record_id).contains_exactly(
                record(1, 100), record(2, 200)
            )
        assert "score:11" in str(info.value)

    def test_configuration_keeps_actual(self) -> None:
        assertion = assert_elements(["+64"])
        assertion.comparing_elements_using(PARSES_TO).contains(64)
        with pytest.raises(CorrespondenceAssertionError):
            assertion.contains(64)
