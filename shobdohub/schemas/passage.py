"""
Reading passage and highlight segment schemas for ShobdoHub.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from .word import ContentModel, Word


class Passage(ContentModel):
    """
    A short bilingual reading text paired with a target vocabulary list.

    `words` keeps file order and may name terms missing from the word list.
    """
    id: int
    title: str
    words: list[str] = []    # uppercase vocabulary tokens
    bangla_text: str = ""
    english_text: str = ""


class TextSegment(ContentModel):
    """Plain, non-interactive run of text."""
    kind: Literal["text"] = "text"
    text: str


class WordSegment(ContentModel):
    """Run of text that matched a vocabulary token and resolved to a Word."""
    kind: Literal["word"] = "word"
    text: str
    word: Word


Segment = Annotated[Union[TextSegment, WordSegment], Field(discriminator="kind")]
