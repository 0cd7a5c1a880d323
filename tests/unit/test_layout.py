"""Unit tests for layout module."""

import pytest

from rofi_menu.layout import (
    TRUNCATION_SUFFIX,
    BreakdownError,
    ColumnLayout,
    Layout,
    PlainLayout,
)


class TestPlainLayout:
    """Tests for PlainLayout."""

    @pytest.mark.parametrize("entry", ["", "hello", "a;b;c", "trailing\n", "  spaced  "])
    def test_apply_is_identity(self, entry):
        assert PlainLayout().apply(entry) == entry

    def test_satisfies_layout_protocol(self):
        assert isinstance(PlainLayout(), Layout)


class TestColumnLayoutInit:
    """Tests for ColumnLayout construction."""

    def test_defaults(self):
        layout = ColumnLayout(width=80, columns=2, separator="|")
        assert layout.width == 80
        assert layout.columns == 2
        assert layout.separator == "|"
        assert layout.breakdown == []
        assert isinstance(layout, Layout)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0, "columns": 2, "separator": ";"},
            {"width": 80, "columns": 0, "separator": ";"},
            {"width": -5, "columns": 2, "separator": ";"},
            {"width": 80, "columns": 2, "separator": ""},
        ],
    )
    def test_rejects_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            ColumnLayout(**kwargs)


class TestSetBreakdown:
    """Tests for ColumnLayout.set_breakdown."""

    def test_valid_breakdown_is_stored(self):
        layout = ColumnLayout(width=94, columns=3, separator=";")
        layout.set_breakdown([50, 20, 30])
        assert layout.breakdown == [50, 20, 30]

    def test_breakdown_is_copied(self):
        values = [60, 40]
        layout = ColumnLayout(width=50, columns=2, separator=";")
        layout.set_breakdown(values)
        values.append(10)
        assert layout.breakdown == [60, 40]

    def test_wrong_length_raises_without_mutating(self):
        layout = ColumnLayout(width=94, columns=3, separator=";")
        with pytest.raises(BreakdownError, match="3 columns"):
            layout.set_breakdown([50, 50])
        assert layout.breakdown == []

    def test_wrong_sum_raises_without_mutating(self):
        layout = ColumnLayout(width=94, columns=3, separator=";")
        layout.set_breakdown([40, 30, 30])
        with pytest.raises(BreakdownError, match="sum to 100"):
            layout.set_breakdown([50, 20, 20])
        assert layout.breakdown == [40, 30, 30]

    def test_breakdown_error_is_value_error(self):
        assert issubclass(BreakdownError, ValueError)


class TestColumnLayoutApply:
    """Tests for ColumnLayout.apply."""

    def test_pads_fields_to_breakdown_budgets(self):
        layout = ColumnLayout(width=94, columns=3, separator=";")
        layout.set_breakdown([50, 20, 30])

        result = layout.apply("Msg;User;Date")

        assert result == "Msg".ljust(47) + "User".ljust(18) + "Date".ljust(28)
        assert len(result) == 93
        assert result[47:51] == "User"
        assert result[65:69] == "Date"

    def test_truncated_field_is_one_longer_than_budget(self):
        layout = ColumnLayout(width=10, columns=1, separator=";")

        result = layout.apply("abcdefghijklmno")

        assert result == "abcdefgh" + TRUNCATION_SUFFIX
        assert len(result) == 11

    def test_truncation_in_middle_column_shifts_following_columns(self):
        layout = ColumnLayout(width=20, columns=2, separator=";")
        layout.set_breakdown([50, 50])

        result = layout.apply("a-very-long-name;x")

        assert result == "a-very-l.. " + "x".ljust(10)
        assert len(result) == 21

    def test_field_exactly_at_budget_is_unchanged(self):
        layout = ColumnLayout(width=20, columns=2, separator=";")
        assert layout.apply("abcdefghij;0123456789") == "abcdefghij0123456789"

    def test_even_split_without_breakdown(self):
        layout = ColumnLayout(width=30, columns=3, separator=",")
        # 100 // 3 = 33 percent -> 33 * 30 // 100 = 9 characters each
        assert layout.apply("a,b,c") == "a".ljust(9) + "b".ljust(9) + "c".ljust(9)

    def test_unset_breakdown_budgets_follow_field_count(self):
        """Without a breakdown every split field gets the even share.

        A layout declared with two columns still lays out three fields when the
        entry contains three, so the line is wider than ``width``.
        """
        layout = ColumnLayout(width=20, columns=2, separator=";")

        result = layout.apply("a;b;c")

        assert layout.budgets(3) == [10, 10, 10]
        assert result == "a".ljust(10) + "b".ljust(10) + "c".ljust(10)
        assert len(result) == 30

    def test_unset_breakdown_with_fewer_fields(self):
        layout = ColumnLayout(width=20, columns=2, separator=";")
        assert layout.apply("only") == "only".ljust(10)

    def test_breakdown_drops_fields_beyond_columns(self):
        layout = ColumnLayout(width=20, columns=2, separator=";")
        layout.set_breakdown([50, 50])
        assert layout.apply("a;b;c") == "a".ljust(10) + "b".ljust(10)

    def test_breakdown_with_fewer_fields_ignores_unused_budgets(self):
        layout = ColumnLayout(width=20, columns=2, separator=";")
        layout.set_breakdown([30, 70])
        assert layout.apply("abc") == "abc".ljust(6)

    def test_multi_character_separator(self):
        layout = ColumnLayout(width=12, columns=2, separator=" :: ")
        assert layout.apply("ab :: cd") == "ab    cd    "

    def test_apply_is_repeatable(self):
        layout = ColumnLayout(width=40, columns=2, separator=";")
        layout.set_breakdown([25, 75])
        assert layout.apply("x;y") == layout.apply("x;y")
