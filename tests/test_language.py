import pytest

from auto_i18n.language import check_language, make_classifier


def test_default_classifier_detects_hangul():
    assert check_language("안녕하세요") is True
    assert check_language("Hello 세계") is True
    assert check_language("Hello") is False
    assert check_language("") is False


def test_jamo_counts_as_hangul():
    assert check_language(chr(0x3131)) is True   # ㄱ


def test_multiple_scripts():
    classify = make_classifier(["cyrillic", "han"])
    assert classify("Привет")
    assert classify(chr(0x4E2D) + chr(0x6587))
    assert not classify("안녕")


def test_unknown_script_is_rejected():
    with pytest.raises(ValueError):
        make_classifier(["klingon"])


def test_empty_script_list_is_rejected():
    with pytest.raises(ValueError):
        make_classifier([])
