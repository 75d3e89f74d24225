from __future__ import annotations

from bay_allocation.allocation.allocation_models import ArticleRecord, Provenance, SizeClass
from bay_allocation.allocation.location_resolver import infer_bay_code, resolve

from builders import make_master


def test_master_rows_seed_the_mapping() -> None:
    master = [
        make_master("D12-03-01", slot_type="PP3"),
        make_master("D12-03-02", slot_type="BLL"),
        make_master("D12-04-01", slot_type=""),
    ]

    resolution = resolve(master, [], [])

    assert list(resolution.locations) == ["D12-03-01", "D12-03-02", "D12-04-01"]
    first = resolution.locations["D12-03-01"]
    assert first.bay_code == "D12-03"
    assert first.size_class is SizeClass.SMALL
    assert first.provenance is Provenance.FROM_MASTER

    unknown = resolution.locations["D12-04-01"]
    assert unknown.slot_type == "UNKNOWN"
    assert unknown.size_class is SizeClass.LARGE
    assert resolution.audit["D12-04-01"].in_locations


def test_duplicate_master_codes_keep_first_row() -> None:
    master = [make_master("D1-01-01", slot_type="PP3"), make_master("D1-01-01", slot_type="BLH")]

    resolution = resolve(master, [], [])

    assert len(resolution.locations) == 1
    assert resolution.locations["D1-01-01"].size_class is SizeClass.SMALL


def test_article_locations_are_cross_checked_not_created() -> None:
    master = [make_master("D1-01-01")]
    articles = [
        ArticleRecord(article=100, pick_location="D1-01-01"),
        ArticleRecord(article=200, pick_location="D9-09-09"),
        ArticleRecord(article=300, pick_location=""),
    ]

    resolution = resolve(master, articles, [])

    assert resolution.audit["D1-01-01"].in_articles
    assert resolution.unknown_article_locations == [(200, "D9-09-09")]
    assert "D9-09-09" not in resolution.locations


def test_missing_pick_location_is_synthesized(event) -> None:
    resolution = resolve([], [], [event(1, "Z99-14-02")])

    loc = resolution.locations["Z99-14-02"]
    assert loc.bay_code == "Z99-14"
    assert loc.size_class is SizeClass.LARGE
    assert loc.provenance is Provenance.SYNTHESIZED
    assert loc.is_synthesized
    assert resolution.synthesized == [loc]


def test_synthesis_is_idempotent(event) -> None:
    events = [event(1, "Z99-14-02"), event(2, "Z99-14-02"), event(3, " Z99-14-02 ")]

    resolution = resolve([], [], events)

    assert len(resolution.locations) == 1
    assert resolution.audit["Z99-14-02"].pick_count == 3


def test_codes_without_bay_shape_are_dropped(event) -> None:
    events = [event(1, "GARBAGE"), event(2, "GARBAGE"), event(3, "-14"), event(4, "")]

    resolution = resolve([], [], events)

    assert resolution.locations == {}
    assert resolution.unresolvable_codes == ["GARBAGE", "-14"]


def test_pick_counts_on_master_locations(event) -> None:
    master = [make_master("D1-01-01"), make_master("D1-01-02")]
    events = [event(1, "D1-01-01"), event(2, "D1-01-01")]

    resolution = resolve(master, [], events)

    assert resolution.audit["D1-01-01"].in_picks
    assert resolution.audit["D1-01-01"].pick_count == 2
    assert not resolution.audit["D1-01-02"].in_picks


def test_infer_bay_code() -> None:
    assert infer_bay_code("Z99-14-02") == "Z99-14"
    assert infer_bay_code("D12-03") == "D12-03"
    assert infer_bay_code("D12") is None
    assert infer_bay_code("D12-") is None
