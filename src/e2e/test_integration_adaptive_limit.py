import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fastmatch import FastMatcher
from fastmatch.index import SortedIndex
from fastmatch.models import IndexEntry
from fastmatch.search import collect, merge


def _list(*pairs):
    return SortedIndex(IndexEntry(pos, f"r{pos}", key) for pos, key in pairs)


@pytest.mark.e2e
def test_limit_grows_by_entries_found_per_list():
    first = _list((0, "xa"), (1, "xb"))
    second = _list((0, "xa"), (1, "xb"), (2, "xc"))
    items = collect([first, second], "x", 3)
    assert [e.position for e in items] == [0, 1, 0, 1, 2]
    assert merge(items, 3) == ["r0", "r1", "r2"]


@pytest.mark.e2e
def test_later_list_not_starved_by_duplicates():
    recs = [{"f": "xa", "g": "xa"}, {"f": "xb", "g": "xb"}, {"f": "zz", "g": "xc"}]
    m = FastMatcher(recs, selector=["f", "g"], limit=3)
    assert m.get_matches("x") == recs


@pytest.mark.e2e
def test_each_list_scans_at_most_the_requested_limit():
    lists = [_list(*[(i, f"k{i}") for i in range(10)]) for _ in range(3)]
    items = collect(lists, "k", 4)
    assert len(items) == 12
    assert merge(items, 4) == ["r0", "r1", "r2", "r3"]


@pytest.mark.e2e
def test_merge_preserve_order_sorts_by_position():
    items = [IndexEntry(3, "d", "a"), IndexEntry(1, "b", "b"), IndexEntry(3, "d", "c"), IndexEntry(0, "a", "z")]
    assert merge(items, 10) == ["d", "b", "a"]
    assert merge(items, 10, preserve_order=True) == ["a", "b", "d"]
    assert merge(items, 2, preserve_order=True) == ["a", "b"]


# ---- property tests against a brute-force reference ----

_text = st.text(alphabet="abAB ", max_size=6)
_records = st.lists(st.fixed_dictionaries({"f": _text, "g": _text}), max_size=15)
_selectors = st.sampled_from([["f"], ["g"], ["f", "g"], ["g", "f"]])


def _tails(key):
    s = key.lstrip()
    return [s] + [s[i:] for i in range(1, len(s) + 1)
                  if s[i - 1].isspace() and (i == len(s) or not s[i].isspace())]


def _expected_positions(records, selector, prefix, case_insensitive, any_word):
    if case_insensitive:
        prefix = prefix.lower()
    hits = set()
    for pos, rec in enumerate(records):
        for name in selector:
            key = rec[name].lower() if case_insensitive else rec[name]
            keys = _tails(key) if any_word else [key]
            if any(k.startswith(prefix) for k in keys):
                hits.add(pos)
    return hits


@pytest.mark.e2e
@settings(max_examples=300, deadline=None)
@given(
    records=_records,
    selector=_selectors,
    prefix=st.text(alphabet="abAB ", max_size=3),
    limit=st.integers(min_value=1, max_value=6),
    case_insensitive=st.booleans(),
    any_word=st.booleans(),
    preserve_order=st.booleans(),
)
def test_matches_agree_with_brute_force(records, selector, prefix, limit,
                                        case_insensitive, any_word, preserve_order):
    m = FastMatcher(records, selector=selector, limit=limit, case_insensitive=case_insensitive,
                    any_word=any_word, preserve_order=preserve_order)
    got = m.get_matches(prefix)
    ids = [id(r) for r in got]
    positions = [next(i for i, rec in enumerate(records) if rec is r) for r in got]
    expected = _expected_positions(records, selector, prefix, case_insensitive, any_word)

    assert len(set(ids)) == len(ids)
    assert set(positions) <= expected
    assert len(got) == min(limit, len(expected))
    if preserve_order:
        assert positions == sorted(positions)


@pytest.mark.e2e
@settings(max_examples=100, deadline=None)
@given(records=st.lists(_text, max_size=20), limit=st.integers(min_value=1, max_value=30))
def test_empty_prefix_returns_min_of_limit_and_size(records, limit):
    assert len(FastMatcher(records, limit=limit, any_word=True).get_matches("")) == min(limit, len(records))
