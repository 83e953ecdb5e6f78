"""Tests for range-compressed alpha strings."""

from palette_machine.core.alphas import alphas_to_string, parse_alpha_string


class TestParseAlphaString:
    def test_ranges_and_values(self) -> None:
        assert parse_alpha_string("0-3,10") == [0, 1, 2, 3, 10]

    def test_sorted_and_deduplicated(self) -> None:
        assert parse_alpha_string("50,10,10,5-6") == [5, 6, 10, 50]

    def test_whitespace_is_ignored(self) -> None:
        assert parse_alpha_string(" 5 , 10 - 12 ") == [5, 10, 11, 12]

    def test_empty_input(self) -> None:
        assert parse_alpha_string("") == []
        assert parse_alpha_string(None) == []
        assert parse_alpha_string(",,") == []

    def test_malformed_parts_are_skipped(self) -> None:
        assert parse_alpha_string("50,abc,x-5,-5") == [50]

    def test_out_of_range_values_are_dropped(self) -> None:
        assert parse_alpha_string("99-102,120") == [99, 100]

    def test_reversed_range_is_empty(self) -> None:
        assert parse_alpha_string("10-5") == []


class TestAlphasToString:
    def test_runs_of_three_collapse(self) -> None:
        assert alphas_to_string([1, 2, 3, 7]) == "1-3,7"

    def test_run_of_two_stays_listed(self) -> None:
        assert alphas_to_string([1, 2]) == "1,2"

    def test_unsorted_input(self) -> None:
        assert alphas_to_string([30, 10, 20, 21, 22]) == "10,20-22,30"

    def test_empty(self) -> None:
        assert alphas_to_string([]) == ""

    def test_default_ramp_round_trips(self) -> None:
        text = "0-30,35,40,45,50,55,60,65,70-99"
        assert alphas_to_string(parse_alpha_string(text)) == text
