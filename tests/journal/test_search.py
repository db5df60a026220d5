"""Tests for search and pagination."""

import math

import pytest

from journal.errors import InvalidQueryError
from journal.search import JournalSearch, Pagination


class TestPagination:
    @pytest.mark.parametrize("limit", [1, 10, 100])
    @pytest.mark.parametrize("total", [0, 1, 37, 250])
    def test_consistency(self, limit, total):
        total_pages = math.ceil(total / limit)
        for page in range(1, total_pages + 2):
            p = Pagination.build(page, limit, total)
            assert p.total_pages == total_pages
            assert p.total_docs == total
            assert p.has_next_page == (page < total_pages)
            assert p.has_prev_page == (page > 1)

    def test_example(self):
        p = Pagination.build(1, 10, 23)
        assert (p.total_pages, p.has_next_page, p.has_prev_page) == (3, True, False)

    def test_last_page(self):
        p = Pagination.build(3, 10, 23)
        assert (p.has_next_page, p.has_prev_page) == (False, True)

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_invalid(self, page, limit):
        with pytest.raises(InvalidQueryError):
            Pagination.build(page, limit, 5)


class TestJournalSearch:
    @pytest.fixture
    def search(self, storage):
        return JournalSearch(storage)

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_query_required(self, search, query):
        with pytest.raises(InvalidQueryError):
            search.search("alice", query)

    def test_gratitude_pages(self, search, add_entry):
        for i in range(23):
            add_entry(days_ago=30 - i, content=f"Gratitude list number {i}")
        for i in range(5):
            add_entry(days_ago=i, content="Nothing to report")

        first = search.search("alice", "gratitude", page=1, limit=10)
        assert len(first.entries) == 10
        assert first.pagination.total_docs == 23
        assert first.pagination.total_pages == 3
        assert first.pagination.has_next_page is True
        assert first.pagination.has_prev_page is False
        # Most recent first
        assert first.entries[0].content == "Gratitude list number 22"

        last = search.search("alice", "gratitude", page=3, limit=10)
        assert len(last.entries) == 3
        assert last.entries[-1].content == "Gratitude list number 0"
        assert last.pagination.has_next_page is False

    def test_page_past_end(self, search, sample_entries):
        result = search.search("alice", "work", page=5, limit=10)
        assert result.entries == []
        assert result.pagination.total_docs == 2
        assert result.pagination.has_prev_page is True

    def test_query_is_trimmed(self, search, sample_entries):
        padded = search.search("alice", "  work ")
        assert padded.pagination.total_docs == 2
        assert [e.id for e in padded.entries] == [sample_entries[2].id, sample_entries[1].id]

    def test_no_matches(self, search, sample_entries):
        result = search.search("alice", "zebra")
        assert result.entries == []
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next_page is False

    def test_list_entries(self, search, sample_entries, add_entry):
        add_entry(owner="bob")
        result = search.list_entries("alice", page=1, limit=2)
        assert [e.id for e in result.entries] == [sample_entries[2].id, sample_entries[1].id]
        assert result.pagination.total_docs == 3
        assert result.pagination.total_pages == 2
        assert result.pagination.has_next_page is True

    def test_list_oldest_first(self, search, sample_entries):
        result = search.list_entries("alice", page=1, limit=10, newest_first=False)
        assert [e.id for e in result.entries] == [e.id for e in sample_entries]
        assert result.pagination.has_next_page is False

    def test_list_rejects_bad_page(self, search):
        with pytest.raises(InvalidQueryError):
            search.list_entries("alice", page=0)
