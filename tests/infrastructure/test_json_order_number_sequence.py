"""Tests for the per-month order number counter."""

from printshop.infrastructure.persistence.json_order_number_sequence import (
    JsonOrderNumberSequence,
)


def test_counts_up_within_a_month(tmp_path):
    sequence = JsonOrderNumberSequence(tmp_path / "sequences.json")
    assert [sequence.next_value(2024, 6) for _ in range(3)] == [1, 2, 3]


def test_each_month_has_its_own_counter(tmp_path):
    sequence = JsonOrderNumberSequence(tmp_path / "sequences.json")
    sequence.next_value(2024, 6)
    sequence.next_value(2024, 6)
    assert sequence.next_value(2024, 7) == 1
    assert sequence.next_value(2025, 6) == 1


def test_counter_survives_a_new_instance(tmp_path):
    path = tmp_path / "sequences.json"
    JsonOrderNumberSequence(path).next_value(2024, 6)
    assert JsonOrderNumberSequence(path).next_value(2024, 6) == 2


def test_new_month_is_seeded_from_existing_numbers(tmp_path):
    existing = ["CMD240600007", "CMD240600003", "CMD240500099", "legacy-12"]
    sequence = JsonOrderNumberSequence(
        tmp_path / "sequences.json", existing_numbers=lambda: existing
    )
    assert sequence.next_value(2024, 6) == 8
    assert sequence.next_value(2024, 5) == 100
    assert sequence.next_value(2024, 8) == 1
