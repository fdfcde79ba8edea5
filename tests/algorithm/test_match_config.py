"""Tests for MatchConfig and ContainmentMode."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from correspondence_diff.algorithm.config import ContainmentMode, MatchConfig


class TestContainmentMode:
    def test_values(self) -> None:
        assert [mode.value for mode in ContainmentMode] == ["any", "at_least", "exactly", "none"]

    def test_is_str(self) -> None:
        assert ContainmentMode.EXACTLY == "exactly"


class TestMatchConfig:
    def test_defaults(self) -> None:
        config = MatchConfig()
        assert config.mode is ContainmentMode.EXACTLY
        assert config.in_order is False
        assert config.element_label == "elements"
        assert config.add_type_info is True

    def test_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            MatchConfig().in_order = True  # type: ignore[misc]

    @pytest.mark.parametrize("mode", [ContainmentMode.AT_LEAST, ContainmentMode.EXACTLY])
    def test_in_order_modes(self, mode: ContainmentMode) -> None:
        assert MatchConfig(mode=mode, in_order=True).in_order

    @pytest.mark.parametrize("mode", [ContainmentMode.ANY, ContainmentMode.NONE])
    def test_in_order_rejected_for_other_modes(self, mode: ContainmentMode) -> None:
        with pytest.raises(ValueError, match="in_order"):
            MatchConfig(mode=mode, in_order=True)

    def test_mode_must_be_enum(self) -> None:
        with pytest.raises(ValueError, match="mode"):
            MatchConfig(mode="exactly")  # type: ignore[arg-type]

    def test_element_label(self) -> None:
        assert MatchConfig(element_label="values").element_label == "values"
        with pytest.raises(ValueError, match="element_label"):
            MatchConfig(element_label="items")
