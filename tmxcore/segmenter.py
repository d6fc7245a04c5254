"""Paragraph and sentence segmentation of translatable strings."""
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Union

import spacy
from spacy.language import Language

from .logger import get_logger

logger = get_logger(__name__)

# spaCy's language-neutral pipeline
NEUTRAL_LANGUAGE = "xx"


class SegmentationMode(str, Enum):
    """How strings are cut into translation units (TMX header segtype)."""
    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"


def locale_language(locale: Optional[str]) -> str:
    """Return the lowercase language subtag of a BCP-47 style locale."""
    if not locale:
        return NEUTRAL_LANGUAGE
    return locale.replace("_", "-").split("-")[0].lower() or NEUTRAL_LANGUAGE


@lru_cache(maxsize=None)
def _pipeline_for(language: str) -> Language:
    """
    Builds (once per language) a blank pipeline with a rule-based sentencizer.
    The language's tokenizer exceptions keep abbreviations such as "Dr." or
    "U.S." in one token, so they never end a sentence. Japanese needs
    SudachiPy for its tokenizer.
    """
    try:
        nlp = spacy.blank(language)
    except ImportError as exc:
        # Unknown language code, or its tokenizer needs an extra package
        logger.warning(f"No spaCy pipeline for '{language}' ({exc}), using '{NEUTRAL_LANGUAGE}'")
        if language == NEUTRAL_LANGUAGE:
            raise
        return _pipeline_for(NEUTRAL_LANGUAGE)
    nlp.add_pipe("sentencizer")
    return nlp


def split_sentences(text: str, locale: Optional[str]) -> List[str]:
    nlp = _pipeline_for(locale_language(locale))
    sentences = []
    for sent in nlp(text).sents:
        stripped = sent.text.strip()
        if stripped:
            sentences.append(stripped)
    return sentences


def segment(text: Optional[str], locale: Optional[str], mode: Union[SegmentationMode, str]) -> List[str]:
    """
    Segments text into paragraph or sentence sized pieces.
    Empty or missing text yields no segments at all.
    """
    if not text:
        return []
    if SegmentationMode(mode) is SegmentationMode.PARAGRAPH:
        return [text]
    return split_sentences(text, locale)
