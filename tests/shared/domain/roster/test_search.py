import pytest

from stride.shared.domain.roster import RosterIndex, RosterSearch, SelectionSet, SortOrder, filter_buckets


@pytest.fixture
def index(make_contact):
    index = RosterIndex()
    for record in [
        make_contact("1", "Zoe", "Adams"),
        make_contact("2", "Amir", "Baker"),
        make_contact("3", "Bea", "Abbott"),
        make_contact("4", "Prince", ""),
        make_contact("5", "Cleo", "Zhang"),
    ]:
        index.ingest(record, SortOrder.FAMILY_NAME)
    return index


def ids(sections):
    return [(key, [record.identifier for record in records]) for key, records in sections]


def test_blank_query_returns_everything(index):
    assert filter_buckets(index, "   ") == index.buckets()


def test_filter_is_case_insensitive_and_drops_empty_buckets(index):
    assert ids(filter_buckets(index, "ZH")) == [("Z", ["5"])]


def test_filter_matches_any_name_field_and_keeps_order(index):
    assert ids(filter_buckets(index, "b")) == [("A", ["3"]), ("B", ["2"])]


def test_filter_keeps_hash_bucket_last(index):
    assert ids(filter_buckets(index, "i")) == [("B", ["2"]), ("#", ["4"])]


def test_overlay_never_touches_selection(index):
    selection = SelectionSet()
    selection.select("1")
    search = RosterSearch(index)

    search.update("zhang")
    assert search.is_active
    assert ids(search.sections()) == [("Z", ["5"])]
    assert selection.all() == frozenset({"1"})

    search.clear()
    assert not search.is_active
    assert search.sections() == index.buckets()
