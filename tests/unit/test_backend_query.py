"""Unit tests for backend query rendering."""

from __future__ import annotations

import pytest

from note_indexer.search import backend_query as bq


class TestToString:
    def test_term(self) -> None:
        assert bq.to_string(bq.Term("title", "roadmap")) == "title:roadmap"

    def test_phrase(self) -> None:
        assert bq.to_string(bq.Term("body", "release plan", phrase=True)) == 'body:"release plan"'

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            (bq.RangeBound("date", lower=bq.Bound(10, inclusive=False)), "date:{10 TO *]"),
            (bq.RangeBound("date", lower=bq.Bound(10, inclusive=True)), "date:[10 TO *]"),
            (bq.RangeBound("date", upper=bq.Bound(10, inclusive=False)), "date:[* TO 10}"),
            (bq.RangeBound("date", upper=bq.Bound(10, inclusive=True)), "date:[* TO 10]"),
            (
                bq.RangeBound("date", bq.Bound(1, inclusive=True), bq.Bound(5, inclusive=False)),
                "date:[1 TO 5}",
            ),
        ],
    )
    def test_ranges(self, query: bq.RangeBound, expected: str) -> None:
        assert bq.to_string(query) == expected

    def test_and_marks_required_clauses(self) -> None:
        query = bq.And((bq.Term("tags", "work"), bq.Term("tags", "urgent")))
        assert bq.to_string(query) == "(+tags:work +tags:urgent)"

    def test_or(self) -> None:
        query = bq.Or((bq.Term("title", "x"), bq.Term("body", "x")))
        assert bq.to_string(query) == "(title:x body:x)"

    def test_exclude(self) -> None:
        assert bq.to_string(bq.exclude(bq.Term("status", "done"))) == "(+*:* -status:done)"

    def test_match_all(self) -> None:
        assert bq.to_string(bq.MatchAll()) == "*:*"


class TestStructure:
    def test_exclude_shape(self) -> None:
        inner = bq.Term("tags", "work")
        assert bq.exclude(inner) == bq.And((bq.MatchAll(), bq.Not(inner)))

    def test_queries_are_hashable(self) -> None:
        query = bq.Or((bq.Term("title", "x"), bq.exclude(bq.Term("body", "y"))))
        assert hash(query) == hash(
            bq.Or((bq.Term("title", "x"), bq.exclude(bq.Term("body", "y"))))
        )

    def test_unknown_variant(self) -> None:
        with pytest.raises(TypeError):
            bq.to_string("title:x")  # type: ignore[arg-type]
