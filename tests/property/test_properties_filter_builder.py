"""
Property-based tests for the query/filter builder.
"""
import math
import pytest
from hypothesis import given, settings, strategies as st

from error_tracker.core.domain.error_log import ErrorCategory, ProgrammingLanguage
from error_tracker.core.query.filter_builder import (
    ErrorLogFilter,
    build_query,
    fetch_page,
    paginate,
)
from error_tracker.utils.errors import InvalidInputError
from factories import make_payload, payloads
from memory_store import InMemoryErrorLogStore


def _store_with(owner_count_payloads):
    store = InMemoryErrorLogStore()
    owner = store.add_owner()
    for payload in owner_count_payloads:
        store.insert(owner.id, payload)
    return store, owner


# Property: pagination arithmetic
@given(
    total=st.integers(min_value=0, max_value=60),
    page=st.integers(min_value=1, max_value=10),
    limit=st.integers(min_value=1, max_value=25),
)
@settings(max_examples=50, deadline=None)
def test_page_size_and_total_pages(total, page, limit):
    """
    For any page >= 1 and limit >= 1, totalPages = ceil(total / limit) and
    the page holds min(limit, max(0, total - (page - 1) * limit)) records.
    """
    store, owner = _store_with([make_payload(title=f"error {i}") for i in range(total)])

    result = fetch_page(store, ErrorLogFilter(owner_id=owner.id, page=page, limit=limit))

    assert result.pagination.total_pages == math.ceil(total / limit)
    assert result.pagination.total_items == total
    assert result.pagination.current_page == page
    assert result.pagination.items_per_page == limit
    assert len(result.records) == min(limit, max(0, total - (page - 1) * limit))


def test_twenty_five_records_ten_per_page():
    store, owner = _store_with([make_payload(title=f"error {i}") for i in range(25)])

    def page(n):
        return fetch_page(store, ErrorLogFilter(owner_id=owner.id, page=n, limit=10))

    assert len(page(1).records) == 10
    assert len(page(3).records) == 5
    beyond = page(4)
    assert beyond.records == []
    assert beyond.pagination.total_pages == 3
    assert beyond.pagination.total_items == 25


def test_pages_do_not_overlap():
    store, owner = _store_with([make_payload(title=f"error {i}") for i in range(23)])

    seen = []
    for n in range(1, 4):
        seen.extend(r.id for r in fetch_page(store, ErrorLogFilter(owner_id=owner.id, page=n, limit=10)).records)

    assert len(seen) == 23
    assert len(set(seen)) == 23


# Property: exact-match filters
@given(
    records=st.lists(payloads, min_size=0, max_size=30),
    language=st.sampled_from(list(ProgrammingLanguage)),
)
@settings(max_examples=50, deadline=None)
def test_language_filter_returns_only_that_language(records, language):
    store, owner = _store_with(records)

    result = fetch_page(
        store,
        ErrorLogFilter(owner_id=owner.id, limit=100, programming_language=language.value),
    )

    expected = sum(1 for p in records if p.programming_language == language)
    assert result.pagination.total_items == expected
    assert all(r.programming_language == language for r in result.records)


@given(
    records=st.lists(payloads, min_size=0, max_size=30),
    language=st.sampled_from(list(ProgrammingLanguage)),
    category=st.sampled_from(list(ErrorCategory)),
)
@settings(max_examples=50, deadline=None)
def test_language_and_category_filters_combine_with_and(records, language, category):
    store, owner = _store_with(records)

    result = fetch_page(
        store,
        ErrorLogFilter(
            owner_id=owner.id,
            limit=100,
            programming_language=language.value,
            category=category.value,
        ),
    )

    expected = sum(1 for p in records if p.programming_language == language and p.category == category)
    assert result.pagination.total_items == expected
    for r in result.records:
        assert r.programming_language == language
        assert r.category == category


def test_search_matches_solution_only_record():
    store, owner = _store_with([
        make_payload(title="Null pointer", description="Crash on start", solution="Guard with optional chaining"),
        make_payload(title="Slow query", description="Report page hangs", solution="Add an index"),
    ])

    result = fetch_page(store, ErrorLogFilter(owner_id=owner.id, search="OPTIONAL chaining"))

    assert [r.title for r in result.records] == ["Null pointer"]


def test_search_is_literal_substring():
    store, owner = _store_with([
        make_payload(title="Regex .* broke"),
        make_payload(title="Regex broke again"),
    ])

    result = fetch_page(store, ErrorLogFilter(owner_id=owner.id, search=".*"))

    assert [r.title for r in result.records] == ["Regex .* broke"]


def test_blank_search_is_ignored():
    criteria = ErrorLogFilter(owner_id="a" * 32, search="   ")
    assert build_query(criteria).search is None


def test_owner_constraint_always_present():
    store = InMemoryErrorLogStore()
    alice = store.add_owner("Alice")
    bob = store.add_owner("Bob")
    store.insert(alice.id, make_payload(title="alice error"))
    store.insert(bob.id, make_payload(title="bob error"))

    result = fetch_page(store, ErrorLogFilter(owner_id=alice.id, search="error"))

    assert [r.title for r in result.records] == ["alice error"]
    assert build_query(ErrorLogFilter(owner_id=alice.id)).owner_id == alice.id


def test_default_sort_is_newest_first():
    store, owner = _store_with([make_payload(title=f"error {i}") for i in range(3)])

    result = fetch_page(store, ErrorLogFilter(owner_id=owner.id))

    assert [r.title for r in result.records] == ["error 2", "error 1", "error 0"]


def test_sort_by_title_ascending():
    store, owner = _store_with([make_payload(title=t) for t in ("b", "c", "a")])

    result = fetch_page(store, ErrorLogFilter(owner_id=owner.id, sort_by="title", sort_order="asc"))

    assert [r.title for r in result.records] == ["a", "b", "c"]


def test_build_query_translates_criteria():
    query = build_query(ErrorLogFilter(
        owner_id="f" * 32,
        page=3,
        limit=20,
        programming_language="Python",
        category="Type Error",
        search=" null ",
        sort_by="severity",
        sort_order="asc",
    ))

    assert query.equals == (("programming_language", "Python"), ("category", "Type Error"))
    assert query.search == "null"
    assert query.sort_field == "severity"
    assert query.descending is False
    assert query.skip == 40
    assert query.limit == 20


def test_list_is_idempotent():
    store, owner = _store_with([make_payload(title=f"error {i}") for i in range(12)])
    criteria = ErrorLogFilter(owner_id=owner.id, page=2, limit=5, search="error")

    assert fetch_page(store, criteria) == fetch_page(store, criteria)


@pytest.mark.parametrize("kwargs,field", [
    ({"page": 0}, "page"),
    ({"page": -1}, "page"),
    ({"limit": 0}, "limit"),
    ({"limit": -5}, "limit"),
    ({"limit": 101}, "limit"),
    ({"page": 2 ** 62, "limit": 100}, "page"),
    ({"programming_language": "COBOL"}, "programmingLanguage"),
    ({"category": "Bad Vibes"}, "category"),
    ({"sort_by": "password"}, "sortBy"),
    ({"sort_order": "sideways"}, "sortOrder"),
])
def test_invalid_criteria_rejected(kwargs, field):
    with pytest.raises(InvalidInputError) as exc_info:
        ErrorLogFilter(owner_id="a" * 32, **kwargs)
    assert field in [e["field"] for e in exc_info.value.errors]


def test_paginate_with_no_items():
    pagination = paginate(0, 1, 10)
    assert pagination.total_pages == 0
    assert pagination.total_items == 0
