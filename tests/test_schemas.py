"""
Schema validation tests for ShobdoHub.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import date, datetime
from pydantic import TypeAdapter, ValidationError

from shobdohub.schemas import (
    # Word
    Difficulty,
    PartOfSpeech,
    Word,
    normalize_token,
    difficulty_for_term,
    # Passage
    Passage,
    TextSegment,
    WordSegment,
    Segment,
    # Grammar
    DEFAULT_CHAPTER_DESCRIPTION,
    SectionType,
    Section,
    ParsedChapter,
    GrammarExample,
    StructuredChapter,
    GrammarChapter,
    GrammarBook,
    # Progress
    WordStatus,
    WordProgress,
    QuizAttempt,
    DailyStreak,
)


class TestNormalization:
    """Test token normalization and difficulty helpers."""

    def test_normalize_token(self):
        assert normalize_token("MITIGATE") == "mitigate"
        assert normalize_token("Well-Being") == "wellbeing"
        assert normalize_token("  o'clock! ") == "oclock"
        assert normalize_token("123") == ""

    def test_difficulty_boundaries(self):
        assert difficulty_for_term("ABATE") == Difficulty.EASY
        assert difficulty_for_term("ABANDON") == Difficulty.MEDIUM
        assert difficulty_for_term("MITIGATE") == Difficulty.MEDIUM
        assert difficulty_for_term("RESILIENT") == Difficulty.HARD

    def test_difficulty_counts_display_length(self):
        assert difficulty_for_term("SELF-MADE") == Difficulty.HARD
        assert difficulty_for_term("ICE CREAM") == Difficulty.HARD
        assert difficulty_for_term("O-K") == Difficulty.EASY


class TestWordSchema:
    """Test the Word record."""

    def test_from_term_derives_fields(self):
        word = Word.from_term("Mitigate", bangla_meaning="প্রশমিত করা")
        assert word.id == "mitigate"
        assert word.word == "Mitigate"
        assert word.first_letter == "M"
        assert word.difficulty == Difficulty.MEDIUM
        assert word.part_of_speech == PartOfSpeech.NOUN
        assert word.synonyms == []

    def test_from_term_explicit_fields_win(self):
        word = Word.from_term("ABATE", difficulty=Difficulty.HARD, part_of_speech="verb")
        assert word.difficulty == Difficulty.HARD
        assert word.part_of_speech == PartOfSpeech.VERB

    def test_first_letter_length(self):
        with pytest.raises(ValidationError):
            Word(id="x", word="x", difficulty="easy", first_letter="AB")

    def test_word_is_frozen(self):
        word = Word.from_term("ABATE")
        with pytest.raises(ValidationError):
            word.word = "CHANGED"

    def test_camel_case_aliases(self):
        word = Word.from_term("ABATE", smart_meaning="to lessen")
        data = word.model_dump(by_alias=True)
        assert data["partOfSpeech"] == PartOfSpeech.NOUN
        assert data["smartMeaning"] == "to lessen"
        assert data["firstLetter"] == "A"

    def test_accepts_alias_input(self):
        word = Word.model_validate({
            "id": "abate",
            "word": "ABATE",
            "banglaMeaning": "কমানো",
            "difficulty": "easy",
            "firstLetter": "A",
        })
        assert word.bangla_meaning == "কমানো"


class TestPassageSchemas:
    """Test passage and segment schemas."""

    def test_passage_defaults(self):
        passage = Passage(id=1, title="A Rainy Morning")
        assert passage.words == []
        assert passage.bangla_text == ""
        assert passage.english_text == ""

    def test_segment_discriminator(self):
        adapter = TypeAdapter(Segment)
        text = adapter.validate_python({"kind": "text", "text": "plain"})
        assert isinstance(text, TextSegment)

        word = Word.from_term("ABATE")
        matched = adapter.validate_python({"kind": "word", "text": "abate", "word": word.model_dump()})
        assert isinstance(matched, WordSegment)
        assert matched.word == word

    def test_segment_unknown_kind(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Segment).validate_python({"kind": "image", "text": "x"})


class TestGrammarSchemas:
    """Test grammar chapter schemas."""

    def test_parsed_chapter_defaults(self):
        chapter = ParsedChapter(id=1, title="Basics")
        assert chapter.kind == "parsed"
        assert chapter.description == DEFAULT_CHAPTER_DESCRIPTION
        assert chapter.sections == []

    def test_section_valid(self):
        section = Section(id="rule-1-1", type="rule", title="Rule 1", content="Use who for people.")
        assert section.type == SectionType.RULE
        assert section.english_content is None

    def test_grammar_example_as_text(self):
        assert GrammarExample(bengali="আমি যাই", english="I go").as_text() == "আমি যাই = I go"
        assert GrammarExample(question="He go?", answer="He goes").as_text() == "He go? -> He goes"
        assert GrammarExample(subject="He").as_text() == "He"

    def test_structured_chapter_sections(self):
        chapter = StructuredChapter.model_validate({
            "chapter": 2,
            "title": "Subject-Verb Agreement",
            "key_concept": "Singular subjects take singular verbs.",
            "content": [{"section": "Basics", "text": "Intro", "examples": [{"bengali": "সে যায়", "english": "He goes"}]}],
            "rules": [{"number": 4, "description": "Each takes a singular verb.", "example": "Each boy plays."}],
            "shortcut_tips": [{"tip": "Look for the real subject."}],
            "steps": ["Find the subject", "Match the verb"],
            "practice_exercises": [{"bengali": "আমি খেলি", "english": "I play"}],
            "extra_field": "kept",
        })
        assert chapter.id == 2
        ids = [s.id for s in chapter.sections]
        assert ids == [
            "ch2-concept",
            "ch2-content-1",
            "ch2-rule-4",
            "ch2-shortcut-1",
            "ch2-steps",
            "ch2-practice",
        ]
        assert chapter.sections[1].examples == ["সে যায় = He goes"]
        assert chapter.sections[2].examples == ["Each boy plays."]
        assert chapter.sections[5].type == SectionType.PRACTICE

    def test_structured_chapter_requires_title(self):
        with pytest.raises(ValidationError):
            StructuredChapter.model_validate({"chapter": 1})

    def test_grammar_chapter_union(self):
        adapter = TypeAdapter(GrammarChapter)
        parsed = adapter.validate_python({"kind": "parsed", "id": 1, "title": "Basics"})
        structured = adapter.validate_python({"kind": "structured", "chapter": 2, "title": "SVA"})
        assert isinstance(parsed, ParsedChapter)
        assert isinstance(structured, StructuredChapter)
        assert parsed.id == 1 and structured.id == 2

    def test_grammar_book(self):
        book = GrammarBook.model_validate({"book": "Essential Grammar", "chapters": [{"chapter": 1, "title": "A"}]})
        assert len(book.chapters) == 1


class TestProgressSchemas:
    """Test progress-related schemas."""

    def test_word_status_values(self):
        assert WordStatus.VIEWED.value == "viewed"
        assert WordStatus.LEARNED.value == "learned"
        assert WordStatus.FAVORITE.value == "favorite"

    def test_word_progress_valid(self):
        now = datetime.now()
        progress = WordProgress(word_id="abate", word="ABATE", first_viewed_at=now, last_viewed_at=now)
        assert progress.status == WordStatus.VIEWED
        assert progress.view_count == 1

    def test_quiz_attempt_score_bounds(self):
        with pytest.raises(ValidationError):
            QuizAttempt(
                quiz_type="definition",
                total_questions=10,
                correct_answers=5,
                score_percentage=120.0,
                completed_at=datetime.now(),
            )

    def test_daily_streak_defaults(self):
        streak = DailyStreak()
        assert streak.current_streak == 0
        assert streak.last_activity_date is None
        assert DailyStreak(last_activity_date="2024-05-01").last_activity_date == date(2024, 5, 1)


class TestSchemaImports:
    """Test that all schemas can be imported from the main module."""

    def test_import_from_shobdohub_schemas(self):
        from shobdohub import schemas
        for name in schemas.__all__:
            assert hasattr(schemas, name)
