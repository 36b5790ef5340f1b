"""
Text cleanup helpers shared by the content parsers.

Hand-authored content files are copy-pasted from documents, so they carry
zero-width marks, byte-order marks and Bengali text whose characters were
spaced apart by PDF extraction.
"""

import re

BENGALI_CHARS = '\u0980-\u09FF'

ZERO_WIDTH_PATTERN = re.compile('[\u200B-\u200D\uFEFF]')

# "বাংলা অর্থঃ" label, tolerating the broken spacing left by PDF extraction
BANGLA_MEANING_PREFIX = re.compile(
    r'^ব\s*া\s*া?ং?ল\s*া\s*অ\s*র্\s*থঃ?\s*',
    re.IGNORECASE,
)

_SPACED_BENGALI = re.compile(f'([{BENGALI_CHARS}])\\s+([{BENGALI_CHARS}])')
_MULTI_SPACE = re.compile(r'\s{2,}')
_LEADING_PUNCT = re.compile(r'^[,;:\s]+')


def strip_zero_width(text: str) -> str:
    """Remove zero-width spaces/joiners and byte-order marks."""
    return ZERO_WIDTH_PATTERN.sub('', text)


def has_bengali(text: str) -> bool:
    return re.search(f'[{BENGALI_CHARS}]', text) is not None


def clean_bangla_text(text: str) -> str:
    """
    Clean a Bangla meaning line.

    Steps:
    - drop the "বাংলা অর্থঃ" label
    - join Bengali characters separated by stray whitespace
    - collapse repeated whitespace
    - drop leading separators
    """
    if not text:
        return ''

    cleaned = BANGLA_MEANING_PREFIX.sub('', text)

    # Overlapping pairs need repeated passes until nothing changes
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _SPACED_BENGALI.sub(r'\1\2', cleaned)

    cleaned = _MULTI_SPACE.sub(' ', cleaned).strip()
    return _LEADING_PUNCT.sub('', cleaned)
