"""
Grammar chapter schemas for ShobdoHub.

Chapters come in two archetypes, discriminated by `kind`:
- ParsedChapter: derived from the semi-structured grammar text by regex
- StructuredChapter: the pre-structured JSON shape, accepted as-is

Both expose the same reading view (id, title, title_bengali, description,
sections) so callers never need to know which source a chapter came from.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .word import ContentModel

DEFAULT_CHAPTER_DESCRIPTION = "Essential grammar concepts for effective English writing."


class SectionType(str, Enum):
    RULE = "rule"
    EXAMPLE = "example"
    SHORTCUT = "shortcut"
    NOTE = "note"
    PRACTICE = "practice"
    CONTENT = "content"


class Section(ContentModel):
    id: str
    type: SectionType
    title: str
    content: str
    examples: list[str] = []
    english_content: Optional[str] = None  # "Example(s):" span of a rule


class BilingualPair(ContentModel):
    bengali: str
    english: str


# -----------------------------------------------------------------------------
# Regex-derived chapter
# -----------------------------------------------------------------------------

class ParsedChapter(ContentModel):
    kind: Literal["parsed"] = "parsed"
    id: int
    title: str
    title_bengali: str = ""
    description: str = DEFAULT_CHAPTER_DESCRIPTION
    sections: list[Section] = []
    raw_content: str = ""


# -----------------------------------------------------------------------------
# Pre-structured JSON chapter
# -----------------------------------------------------------------------------

class JsonModel(BaseModel):
    """Lenient base for the hand-authored grammar JSON."""
    model_config = ConfigDict(frozen=True, extra="allow")


class GrammarExample(JsonModel):
    bengali: Optional[str] = None
    english: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    subject: Optional[str] = None

    def as_text(self) -> str:
        """Flatten the example into one display line."""
        if self.bengali and self.english:
            return f"{self.bengali} = {self.english}"
        if self.question and self.answer:
            return f"{self.question} -> {self.answer}"
        parts = [self.bengali, self.english, self.question, self.answer, self.subject]
        return " ".join(p for p in parts if p)


class ContentBlock(JsonModel):
    section: Optional[str] = None
    text: Optional[str] = None
    examples: list[GrammarExample] = []


class RuleEntry(JsonModel):
    number: Optional[int] = None
    description: Optional[str] = None
    rule: Optional[str] = None
    examples: list[str] = []
    example: Optional[str] = None


class ShortcutTip(JsonModel):
    tip: str
    examples: list[str] = []


class PracticeExercise(JsonModel):
    bengali: str
    english: str


class StructuredChapter(JsonModel):
    kind: Literal["structured"] = "structured"
    chapter: int
    title: str
    title_bengali: str = ""
    description: str = DEFAULT_CHAPTER_DESCRIPTION
    key_concept: Optional[str] = None
    basic_formula: Optional[str] = None
    content: list[ContentBlock] = []
    rules: list[RuleEntry] = []
    shortcut_tips: list[ShortcutTip] = []
    steps: list[str] = []
    practice_exercises: list[PracticeExercise] = []

    @property
    def id(self) -> int:
        return self.chapter

    @property
    def sections(self) -> list[Section]:
        """Flatten the JSON blocks into Sections in source order."""
        prefix = f"ch{self.chapter}"
        sections: list[Section] = []

        if self.key_concept or self.basic_formula:
            body = "\n".join(t for t in (self.key_concept, self.basic_formula) if t)
            sections.append(Section(
                id=f"{prefix}-concept",
                type=SectionType.NOTE,
                title="Key Concept",
                content=body,
            ))

        for i, block in enumerate(self.content, start=1):
            sections.append(Section(
                id=f"{prefix}-content-{i}",
                type=SectionType.CONTENT,
                title=block.section or f"Part {i}",
                content=block.text or "",
                examples=[ex.as_text() for ex in block.examples],
            ))

        for i, rule in enumerate(self.rules, start=1):
            number = rule.number or i
            examples = list(rule.examples)
            if rule.example:
                examples.append(rule.example)
            sections.append(Section(
                id=f"{prefix}-rule-{number}",
                type=SectionType.RULE,
                title=f"Rule {number}",
                content=rule.description or rule.rule or "",
                examples=examples,
            ))

        for i, tip in enumerate(self.shortcut_tips, start=1):
            sections.append(Section(
                id=f"{prefix}-shortcut-{i}",
                type=SectionType.SHORTCUT,
                title=f"Shortcut Tip {i}",
                content=tip.tip,
                examples=list(tip.examples),
            ))

        if self.steps:
            sections.append(Section(
                id=f"{prefix}-steps",
                type=SectionType.NOTE,
                title="Steps",
                content="\n".join(self.steps),
            ))

        if self.practice_exercises:
            sections.append(Section(
                id=f"{prefix}-practice",
                type=SectionType.PRACTICE,
                title="Practice",
                content="Translate the following sentences.",
                examples=[f"{p.bengali} = {p.english}" for p in self.practice_exercises],
            ))

        return sections


GrammarChapter = Annotated[
    Union[ParsedChapter, StructuredChapter],
    Field(discriminator="kind"),
]


class GrammarBook(JsonModel):
    book: str = ""
    chapters: list[StructuredChapter] = []
