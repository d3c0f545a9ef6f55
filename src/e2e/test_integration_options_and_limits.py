import pytest
from fastmatch import FastMatcher, MatcherOptions
from fastmatch import config as CFG


@pytest.mark.e2e
def test_default_options():
    m = FastMatcher(["a"])
    assert m.options == MatcherOptions()
    assert m.options.limit == CFG.DEFAULT_LIMIT == 25
    assert len(m) == 1


@pytest.mark.e2e
def test_falsy_limit_falls_back_to_default():
    words = [f"a{i:02d}" for i in range(30)]
    assert len(FastMatcher(words, limit=0).get_matches("a")) == 25
    assert len(FastMatcher(words, limit=None).get_matches("a")) == 25


@pytest.mark.e2e
def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        FastMatcher(["a"], limit=-1)


@pytest.mark.e2e
def test_limit_respected():
    words = [f"a{i}" for i in range(10)]
    m = FastMatcher(words, limit=4, any_word=True, selector=[None, lambda s: s[::-1]])
    for prefix in ("", "a", "a1", "1"):
        got = m.get_matches(prefix)
        assert len(got) <= 4
        assert len(set(got)) == len(got)


@pytest.mark.e2e
def test_list_selector_is_frozen_in_options():
    sel = ["first", "last"]
    m = FastMatcher([], selector=sel)
    sel.append("middle")
    assert m.options.selector == ("first", "last")
    assert len(m.index_lists) == 2
