import pytest

from tmxcore.segmenter import SegmentationMode, locale_language, segment


def test_paragraph_returns_whole_text():
    text = "This is a test. This is only a test."
    assert segment(text, "en-US", "paragraph") == [text]
    assert segment(text, "en-US", SegmentationMode.PARAGRAPH) == [text]


@pytest.mark.parametrize("mode", ["paragraph", "sentence"])
def test_empty_text_has_no_segments(mode):
    assert segment("", "en-US", mode) == []
    assert segment(None, "en-US", mode) == []


def test_sentence_split_trims():
    assert segment("This is a test.  This is only a test. ", "en-US", "sentence") == [
        "This is a test.",
        "This is only a test.",
    ]


def test_abbreviations_do_not_break_sentences():
    text = "I would like to see Dr. Smith in the U.S. not someone else. Please arrange that."
    assert segment(text, "en-US", "sentence") == [
        "I would like to see Dr. Smith in the U.S. not someone else.",
        "Please arrange that.",
    ]


def test_japanese_sentences():
    assert segment("これはテストです。これは単なるテストです。", "ja-JP", "sentence") == [
        "これはテストです。",
        "これは単なるテストです。",
    ]


def test_single_sentence():
    assert segment("This is a test", "en-US", "sentence") == ["This is a test"]


def test_unknown_language_falls_back():
    assert segment("One. Two.", "qq-QQ", "sentence") == ["One.", "Two."]


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        segment("text", "en-US", "block")


def test_locale_language():
    assert locale_language("de-DE") == "de"
    assert locale_language("zh_Hans_CN") == "zh"
    assert locale_language("EN") == "en"
    assert locale_language(None) == "xx"
