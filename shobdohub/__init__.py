"""ShobdoHub - English/Bangla vocabulary and grammar learning content engine."""

__version__ = "0.1.0"
