"""Tests for end-to-end query normalization."""

import sys
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from LibrarySearch import SearchFilter, normalize, parse_search_query
from LibrarySearch.core.models import (
    FieldFilter,
    HasFilter,
    InFilter,
    LabelFilter,
    LabelFilterType,
    LibraryItemType,
    NoFilter,
    ReadFilter,
    Sort,
    SortBy,
    SortOrder,
)
from LibrarySearch.core.query import KeywordOffset, TextOffset, TokenizedQuery
from LibrarySearch.parser.normalize import assemble_text, normalize_tokens


class TestEmptyQuery(unittest.TestCase):
    def test_blank_inputs_give_canonical_empty_filter(self) -> None:
        for raw in (None, "", "   ", '""', "label:"):
            with self.subTest(raw=raw):
                result = normalize(raw)
                self.assertEqual(result, SearchFilter.empty())
                self.assertIs(result.in_filter, InFilter.INBOX)
                self.assertIs(result.read_filter, ReadFilter.ALL)
                self.assertIsNone(result.query)
                self.assertEqual(result.label_filters, ())
                self.assertEqual(result.ids, ())

    def test_parse_search_query_alias(self) -> None:
        self.assertIs(parse_search_query, normalize)


class TestFreeText(unittest.TestCase):
    def test_text_only_searches_everything(self) -> None:
        result = normalize("hello world")
        self.assertEqual(result.query, "hello world")
        self.assertIs(result.in_filter, InFilter.ALL)

    def test_phrase_is_requoted(self) -> None:
        result = normalize('"quarterly report" budget')
        self.assertEqual(result.query, '"quarterly report" budget')

    def test_text_survives_renormalization(self) -> None:
        first = normalize('is:unread "quarterly report" label:work budget')
        second = normalize(first.query)
        self.assertEqual(first.query, '"quarterly report" budget')
        self.assertEqual(second.query, first.query)

    def test_assemble_text_quotes_any_whitespace(self) -> None:
        self.assertIsNone(assemble_text([]))
        self.assertEqual(assemble_text([TextOffset("a\tb"), TextOffset("c")]), '"a\tb" c')

    def test_assemble_text_escapes_quotes_and_backslashes(self) -> None:
        self.assertEqual(
            assemble_text([TextOffset('say "hi" now'), TextOffset("a\\b c")]),
            r'"say \"hi\" now" "a\\b c"',
        )

    def test_quoted_text_is_stable_across_passes(self) -> None:
        for raw in (r'"say \"hi\" now"', 'it"s a test', r'"back\\slash path"'):
            with self.subTest(raw=raw):
                first = normalize(raw)
                second = normalize(first.query)
                self.assertEqual(second.query, first.query)
        self.assertEqual(normalize(r'"say \"hi\" now"').query, r'"say \"hi\" now"')

    def test_keywords_only_default_to_inbox(self) -> None:
        result = normalize("is:unread")
        self.assertIsNone(result.query)
        self.assertIs(result.in_filter, InFilter.INBOX)
        self.assertIs(result.read_filter, ReadFilter.UNREAD)

    def test_explicit_in_overrides_default(self) -> None:
        self.assertIs(normalize("report in:inbox").in_filter, InFilter.INBOX)
        self.assertIs(normalize("in:all").in_filter, InFilter.ALL)

    def test_unrecognized_in_behaves_as_absent(self) -> None:
        self.assertIs(normalize("in:nowhere").in_filter, InFilter.INBOX)
        self.assertIs(normalize("report in:nowhere").in_filter, InFilter.ALL)
        self.assertIs(normalize("in:archive in:nowhere").in_filter, InFilter.INBOX)


class TestKeywords(unittest.TestCase):
    def test_combined_query(self) -> None:
        result = normalize("in:archive is:unread label:work")
        self.assertIs(result.in_filter, InFilter.ARCHIVE)
        self.assertIs(result.read_filter, ReadFilter.UNREAD)
        self.assertEqual(result.label_filters, (LabelFilter(LabelFilterType.INCLUDE, ("work",)),))

    def test_keyword_names_ignore_case(self) -> None:
        for raw in ("IS:UNREAD", "is:unread", "Is:Unread"):
            with self.subTest(raw=raw):
                self.assertIs(normalize(raw).read_filter, ReadFilter.UNREAD)

    def test_label_list_is_one_entry(self) -> None:
        result = normalize("label:Work,Home")
        self.assertEqual(result.label_filters, (LabelFilter(LabelFilterType.INCLUDE, ("work", "home")),))

    def test_labels_never_merge(self) -> None:
        result = normalize("label:work label:home -label:spam")
        self.assertEqual(
            result.label_filters,
            (
                LabelFilter(LabelFilterType.INCLUDE, ("work",)),
                LabelFilter(LabelFilterType.INCLUDE, ("home",)),
                LabelFilter(LabelFilterType.EXCLUDE, ("spam",)),
            ),
        )

    def test_sort(self) -> None:
        self.assertEqual(normalize("sort:saved-asc").sort, Sort(SortBy.SAVED, SortOrder.ASCENDING))
        self.assertEqual(normalize("sort:saved").sort, Sort(SortBy.SAVED, SortOrder.DESCENDING))
        self.assertIsNone(normalize("sort:bogus").sort)
        self.assertEqual(normalize("sort:saved sort:bogus").sort, Sort(SortBy.SAVED, SortOrder.DESCENDING))

    def test_date_range(self) -> None:
        result = normalize("saved:2023-01-01..*")
        self.assertEqual(len(result.date_filters), 1)
        date_filter = result.date_filters[0]
        self.assertEqual(date_filter.field, "savedAt")
        self.assertEqual(date_filter.start.value, datetime(2023, 1, 1, tzinfo=timezone.utc))
        self.assertIsNone(date_filter.end)

    def test_malformed_date_is_kept(self) -> None:
        date_filter = normalize("published:yesterdayish").date_filters[0]
        self.assertEqual(date_filter.field, "publishedAt")
        self.assertFalse(date_filter.start.is_valid)
        self.assertIsNone(date_filter.end)

    def test_includes(self) -> None:
        self.assertEqual(normalize("includes:a,b,c").ids, ("a", "b", "c"))
        self.assertEqual(normalize("includes:A includes:b").ids, ("A", "b"))

    def test_term_and_match_filters(self) -> None:
        result = normalize('language:English author:"Jane Doe" title:AI note:Later content:x description:Y')
        self.assertEqual(result.term_filters, (FieldFilter("item_language", "english"),))
        self.assertEqual(
            result.match_filters,
            (
                FieldFilter("author", "jane doe"),
                FieldFilter("title", "ai"),
                FieldFilter("note", "later"),
                FieldFilter("content", "x"),
                FieldFilter("description", "y"),
            ),
        )

    def test_has_and_no(self) -> None:
        result = normalize("has:highlights has:bogus no:label no:bogus")
        self.assertEqual(result.has_filters, (HasFilter.HIGHLIGHTS,))
        self.assertEqual(result.no_filters, (NoFilter("label_names"),))

    def test_scalar_strings(self) -> None:
        result = normalize("recommendedBy:Alice site:Example.COM rss:Feed subscription:News")
        self.assertEqual(result.recommended_by, "alice")
        self.assertEqual(result.site_name, "Example.COM")
        self.assertEqual(result.subscription, "news")

    def test_type(self) -> None:
        self.assertIs(normalize("type:PDF").type_filter, LibraryItemType.FILE)
        self.assertIsNone(normalize("type:spaceship").type_filter)
        self.assertIsNone(normalize("type:article type:spaceship").type_filter)

    def test_mode_is_ignored(self) -> None:
        self.assertEqual(normalize("mode:reader"), SearchFilter.empty())

    def test_unknown_names_stay_in_query(self) -> None:
        cases = {
            "color:red": "color:red",
            "aws re:Invent recap": "aws re:Invent recap",
            r"C:\Users report": r"C:\Users report",
            "-color:red is:unread": "-color:red",
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                result = normalize(raw)
                self.assertEqual(result.query, expected)
                self.assertIs(result.in_filter, InFilter.ALL)

    def test_urls_are_free_text(self) -> None:
        result = normalize("https://example.com")
        self.assertEqual(result.query, "https://example.com")


class TestNormalizeTokens(unittest.TestCase):
    def test_uses_given_exclusion_set(self) -> None:
        tokens = TokenizedQuery(
            offsets=(TextOffset("news"), KeywordOffset("label", "a,b")),
            exclude={"label": frozenset({"a,b"})},
        )
        result = normalize_tokens(tokens)
        self.assertEqual(result.query, "news")
        self.assertEqual(result.label_filters, (LabelFilter(LabelFilterType.EXCLUDE, ("a", "b")),))

    def test_result_is_immutable(self) -> None:
        result = normalize("label:work")
        with self.assertRaises(AttributeError):
            result.query = "x"  # type: ignore[misc]
        self.assertIsInstance(result.label_filters, tuple)


class TestConcurrency(unittest.TestCase):
    def test_parallel_calls_are_independent(self) -> None:
        queries = [f"label:l{i} includes:{i}" for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(normalize, queries))
        for i, result in enumerate(results):
            self.assertEqual(result.ids, (str(i),))
            self.assertEqual(result.label_filters[0].labels, (f"l{i}",))


if __name__ == "__main__":
    unittest.main()
