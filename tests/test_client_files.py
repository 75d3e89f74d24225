from __future__ import annotations

from pathlib import Path

import pytest

from bay_allocation.data.client_files import (
    load_client_data,
    parse_european_decimal,
    parse_int,
    read_table,
)

from builders import write_client_files


def test_load_client_data_parses_all_sources(tmp_path: Path) -> None:
    paths = write_client_files(tmp_path)

    data = load_client_data(*paths, area="D")

    assert [m.location for m in data.master_locations] == ["D01-02-01", "D01-02-02", "D01-03-01"]
    assert data.master_locations[0].slot_type == "PP3"
    assert data.master_locations[0].location_class == "C"

    assert [a.article for a in data.articles] == [1001, 1002]
    assert data.articles[0].length == 12.5
    assert data.articles[0].volume == round(12.5 * 10 * 4)

    assert [e.article for e in data.events] == [1001, 1002, 1001, 1003, 1004]
    assert data.events[0].quantity == 3
    assert data.events[1].quantity == 1


def test_malformed_and_out_of_area_rows_are_counted(tmp_path: Path) -> None:
    paths = write_client_files(tmp_path)

    data = load_client_data(*paths, area="D")

    stats = {s.source: s for s in data.stats}
    assert stats["locations"].rows_filtered == 1
    assert stats["locations"].rows_skipped == 1
    assert stats["articles"].rows_skipped == 1
    assert stats["picks"].rows_read == 9
    assert stats["picks"].rows_skipped == 3
    assert stats["picks"].rows_filtered == 1
    assert stats["picks"].rows_kept == 5


def test_empty_area_disables_filter(tmp_path: Path) -> None:
    paths = write_client_files(tmp_path)

    data = load_client_data(*paths, area="")

    assert "R05-01-01" in [m.location for m in data.master_locations]
    assert "R05-01-01" in [e.location_code for e in data.events]


def test_event_sequence_is_file_position(tmp_path: Path) -> None:
    paths = write_client_files(tmp_path)

    data = load_client_data(*paths, area="D")

    sequences = [e.sequence for e in data.events]
    assert sequences == sorted(sequences)
    assert len(set(sequences)) == len(sequences)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_table(tmp_path / "nope.csv", ["Location"])


def test_missing_columns_raise(tmp_path: Path) -> None:
    path = tmp_path / "Locations.csv"
    path.write_text("Location,Aisle\nD01-02-01,D01\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Bay"):
        read_table(path, ["Location", "Aisle", "Bay"])


def test_field_parsers() -> None:
    assert parse_int(" 42 ") == 42
    assert parse_int("") is None
    assert parse_int("12a") is None
    assert parse_european_decimal("12,5") == 12.5
    assert parse_european_decimal("") == 0.0
    assert parse_european_decimal("n/a") == 0.0
