"""
Grammar parser tests for ShobdoHub.

Covers the section strategy chain, chapter metadata and the structured
grammar JSON.
"""

import pytest
from pydantic import ValidationError

from shobdohub.schemas import DEFAULT_CHAPTER_DESCRIPTION, SectionType, StructuredChapter
from shobdohub.utils.grammar_parser import (
    MAX_RAW_CONTENT_LENGTH,
    build_sections,
    extract_bilingual_pairs,
    extract_raw_section,
    extract_rule_sections,
    extract_shortcut_sections,
    format_grammar_content,
    load_grammar_book,
    parse_grammar,
)
from shobdohub.utils.reference_loader import get_chapter_reference, load_reference


class TestMarkedSections:
    """Test Rule-<n> / Shortcut Tip-<n> extraction."""

    def test_rule_and_shortcut(self):
        chapters = parse_grammar('Chapter-3\nRule- 1 Use "who" for people.\nShortcut Tip- 1 Remember WWWH.')
        assert len(chapters) == 1

        chapter = chapters[0]
        assert chapter.id == 3
        assert chapter.title == "Relative Pronouns"
        assert [(s.id, s.type) for s in chapter.sections] == [
            ("rule-3-1", SectionType.RULE),
            ("shortcut-3-1", SectionType.SHORTCUT),
        ]
        assert chapter.sections[0].content == 'Use "who" for people.'
        assert chapter.sections[1].title == "Shortcut Tip 1"
        assert chapter.sections[1].content == "Remember WWWH."

    def test_rule_examples_split_out(self):
        text = (
            "Chapter-2\n"
            "Rule- 1 A singular subject takes a singular verb.\n"
            "Example: He plays football.\nShe sings.\n"
            "Rule- 2 Plural subjects take plural verbs."
        )
        rule_one, rule_two = parse_grammar(text)[0].sections
        assert rule_one.content == "A singular subject takes a singular verb."
        assert rule_one.english_content == "He plays football.\nShe sings."
        assert rule_one.examples == ["He plays football.", "She sings."]
        assert rule_two.content == "Plural subjects take plural verbs."
        assert rule_two.examples == []

    def test_duplicate_rule_numbers_get_unique_ids(self):
        sections = extract_rule_sections(4, "Rule- 1 First version. Rule- 1 Second version.")
        assert [s.id for s in sections] == ["rule-4-1", "rule-4-1-2"]

    def test_plural_shortcut_marker(self):
        sections = extract_shortcut_sections(6, "Shortcut Tips- 2 Articles go before adjectives.")
        assert sections[0].id == "shortcut-6-2"

    def test_no_markers(self):
        assert extract_rule_sections(1, "Nothing to see here.") is None
        assert extract_shortcut_sections(1, "Nothing to see here.") is None


class TestFallbackSections:
    """Test the numbered and catch-all strategies."""

    def test_numbered_items(self):
        text = "Chapter-5\n1. Subjects always come before the verb.\n2. Objects usually follow the main verb."
        sections = parse_grammar(text)[0].sections
        assert [s.id for s in sections] == ["item-5-1", "item-5-2"]
        assert all(s.type == SectionType.NOTE for s in sections)
        assert sections[0].title == "Point 1"
        assert sections[1].content == "Objects usually follow the main verb."

    def test_short_content_becomes_raw_section(self):
        sections = parse_grammar("Chapter-7\nShort note.")[0].sections
        assert len(sections) == 1
        assert sections[0].id == "content-7"
        assert sections[0].type == SectionType.CONTENT
        assert sections[0].content == "Short note."

    def test_raw_section_truncated(self):
        sections = extract_raw_section(9, "x" * (MAX_RAW_CONTENT_LENGTH + 500))
        assert len(sections[0].content) == MAX_RAW_CONTENT_LENGTH

    def test_empty_chapter_has_no_sections(self):
        chapter = parse_grammar("Chapter-8\n   \n")[0]
        assert chapter.sections == []
        assert chapter.title == "Conditional Sentences"

    def test_custom_strategy_chain(self):
        sections = build_sections(9, "Rule- 1 Marked but ignored.", (extract_raw_section,))
        assert [s.id for s in sections] == ["content-9"]

    def test_empty_strategy_chain(self):
        assert build_sections(9, "Rule- 1 Anything.", ()) == []


class TestChapterParsing:
    """Test chapter splitting and metadata."""

    def test_chapters_sorted_by_id(self):
        text = "Chapter-2\nRule- 1 Agreement rule.\nChapter-1\nRule- 1 Basics rule."
        assert [c.id for c in parse_grammar(text)] == [1, 2]

    def test_preamble_ignored(self):
        text = "Essential Grammar Notes\n\nChapter-1\nRule- 1 Basics rule."
        assert [c.id for c in parse_grammar(text)] == [1]

    def test_unknown_chapter_uses_header_title(self):
        chapter = parse_grammar("Chapter-42: Articles and Determiners\nRule- 1 Use an before vowel sounds.")[0]
        assert chapter.title == "Articles and Determiners"
        assert chapter.description == DEFAULT_CHAPTER_DESCRIPTION
        assert chapter.sections[0].content == "Use an before vowel sounds."

    def test_unknown_chapter_without_title(self):
        chapter = parse_grammar("Chapter-42\nRule- 1 Use an before vowel sounds.")[0]
        assert chapter.title == "Chapter 42"

    def test_bengali_header_title(self):
        chapter = parse_grammar("Chapter-3 সম্বন্ধবাচক সর্বনাম\nRule- 1 Use who for people.")[0]
        assert chapter.title == "Relative Pronouns"
        assert chapter.title_bengali == "সম্বন্ধবাচক সর্বনাম"

    def test_empty_input(self):
        assert parse_grammar("") == []


class TestGrammarBook:
    """Test the structured grammar JSON."""

    def test_load_fills_reference_fields(self):
        chapters = load_grammar_book({
            "book": "Essential Grammar",
            "chapters": [
                {"chapter": 3, "title": "Who and Which"},
                {"chapter": 1, "title": "Basics", "description": "Custom description"},
            ],
        })
        assert [c.chapter for c in chapters] == [1, 3]
        assert all(isinstance(c, StructuredChapter) for c in chapters)
        assert chapters[0].description == "Custom description"
        assert chapters[0].title_bengali == get_chapter_reference(1).title_bengali
        assert chapters[1].title == "Who and Which"
        assert chapters[1].description == get_chapter_reference(3).description

    def test_invalid_book(self):
        with pytest.raises(ValidationError):
            load_grammar_book({"chapters": [{"chapter": "one"}]})


class TestDisplayHelpers:
    """Test grammar display helpers."""

    def test_format_grammar_content(self):
        assert format_grammar_content("First sentence. Second one.") == "First sentence.\n\nSecond one."
        assert format_grammar_content("") == ""

    def test_extract_bilingual_pairs(self):
        pairs = extract_bilingual_pairs("আমি ভাত খাই।\nI eat rice.\nNo pair here.")
        assert len(pairs) == 1
        assert pairs[0].bengali == "আমি ভাত খাই।"
        assert pairs[0].english == "I eat rice."


class TestReferenceTables:
    """Test the bundled YAML reference tables."""

    def test_chapter_reference(self):
        reference = get_chapter_reference(3)
        assert reference.title == "Relative Pronouns"
        assert reference.title_bengali

    def test_unknown_chapter_reference(self):
        assert get_chapter_reference(999) is None

    def test_missing_table(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_reference("nonexistent", reference_dir=tmp_path)
