from whowon.core.config import DuplicateMode
from whowon.core.whitelist import Whitelist
from whowon.selection.dedup import (
    DuplicateReport,
    collapse_duplicates,
    filter_duplicates,
)


_NO_WHITELIST = Whitelist()


class TestKeepFirst:

    def test_first_occurrence_survives(self, entries_from):
        kept = filter_duplicates(entries_from("Dave 5\nDave 9"), _NO_WHITELIST, DuplicateMode.KEEP_FIRST)
        assert [e.value for e in kept] == [5.0]

    def test_position_preserved(self, entries_from):
        kept = filter_duplicates(
            entries_from("Eve 1\nDave 5\nDave 9"), _NO_WHITELIST, DuplicateMode.KEEP_FIRST
        )
        assert [(e.name, e.position) for e in kept] == [("Eve", 0), ("Dave", 1)]

    def test_string_mode_accepted(self, entries_from):
        kept = filter_duplicates(entries_from("Dave 5\nDave 9"), _NO_WHITELIST, "keepFirst")
        assert [e.value for e in kept] == [5.0]


class TestKeepLast:

    def test_last_occurrence_survives(self, entries_from):
        kept = filter_duplicates(entries_from("Dave 5\nDave 9"), _NO_WHITELIST, DuplicateMode.KEEP_LAST)
        assert [e.value for e in kept] == [9.0]
        assert kept[0].position == 1

    def test_three_occurrences(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 1\nEve 2\nDave 3\nDave 4"), _NO_WHITELIST, DuplicateMode.KEEP_LAST
        )
        assert [(e.name, e.value) for e in kept] == [("Eve", 2.0), ("Dave", 4.0)]

    def test_output_ordered_by_position(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 1\nEve 2\nDave 3"), _NO_WHITELIST, DuplicateMode.KEEP_LAST
        )
        positions = [e.position for e in kept]
        assert positions == sorted(positions)


class TestWhitelist:

    def test_all_whitelisted_occurrences_survive(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 5\nDave 9"), Whitelist.from_text("Dave"), DuplicateMode.KEEP_FIRST
        )
        assert [e.value for e in kept] == [5.0, 9.0]

    def test_only_listed_names_exempt(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 5\nEve 1\nDave 9\nEve 2"),
            Whitelist.from_text("Dave"),
            DuplicateMode.KEEP_LAST,
        )
        assert [(e.name, e.value) for e in kept] == [("Dave", 5.0), ("Dave", 9.0), ("Eve", 2.0)]

    def test_case_sensitive_match(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 5\nDave 9"), Whitelist.from_text("dave"), DuplicateMode.KEEP_FIRST
        )
        assert len(kept) == 1

    def test_case_insensitive_whitelist(self, entries_from):
        kept = filter_duplicates(
            entries_from("Dave 5\nDave 9"),
            Whitelist.from_text("dave", case_sensitive=False),
            DuplicateMode.KEEP_FIRST,
        )
        assert len(kept) == 2


class TestEmptyNames:

    def test_empty_names_collapse_like_any_name(self, entries_from):
        kept = filter_duplicates(entries_from("5\n9"), _NO_WHITELIST, DuplicateMode.KEEP_FIRST)
        assert [e.value for e in kept] == [5.0]


class TestReport:

    def test_report_counts(self, entries_from):
        report = collapse_duplicates(
            entries_from("Dave 5\nDave 9\nDave 11\nEve 1\nEve 2"),
            Whitelist.from_text("Eve"),
            DuplicateMode.KEEP_FIRST,
        )
        assert isinstance(report, DuplicateReport)
        assert report.discarded_count == 2
        assert [e.value for e in report.discarded] == [9.0, 11.0]
        assert report.whitelisted_kept == 2

    def test_input_order_irrelevant(self, entries_from):
        entries = entries_from("Dave 5\nDave 9\nEve 1")
        forward = filter_duplicates(entries, _NO_WHITELIST, DuplicateMode.KEEP_LAST)
        backward = filter_duplicates(tuple(reversed(entries)), _NO_WHITELIST, DuplicateMode.KEEP_LAST)
        assert forward == backward

    def test_empty_input(self):
        report = collapse_duplicates((), _NO_WHITELIST, DuplicateMode.KEEP_FIRST)
        assert report.entries == ()
        assert report.discarded_count == 0
