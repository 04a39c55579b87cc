"""Tests for bl_common.cents: integer arithmetic utilities."""

from src.bl_common.cents import calculate_fee, cents_to_display


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(1350) == "R$ 13.50"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "R$ 0.00"

    def test_one_cent(self) -> None:
        assert cents_to_display(1) == "R$ 0.01"

    def test_thousands_separator(self) -> None:
        assert cents_to_display(123456789) == "R$ 1,234,567.89"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-R$ 12.00"


class TestCalculateFee:
    def test_exact_ten_percent(self) -> None:
        assert calculate_fee(3000, 1000) == 300

    def test_rounds_up(self) -> None:
        # 10% of 1005 is 100.5 -> 101
        assert calculate_fee(1005, 1000) == 101

    def test_one_cent_still_charged(self) -> None:
        assert calculate_fee(1, 1000) == 1

    def test_zero_amount(self) -> None:
        assert calculate_fee(0, 1000) == 0

    def test_zero_rate(self) -> None:
        assert calculate_fee(5000, 0) == 0
