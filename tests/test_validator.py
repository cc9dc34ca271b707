import pytest

from brename.validator import (
    ILLEGAL_CHARS,
    MSG_EMPTY,
    MSG_ILLEGAL_CHARS,
    MSG_INVALID,
    MSG_RESERVED,
    MSG_TOO_LONG,
    MSG_TRAILING,
    validate_filename,
)


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_empty_names_are_rejected(name: str) -> None:
    result = validate_filename(name)

    assert not result.is_valid
    assert result.error == "Filename cannot be empty" == MSG_EMPTY


@pytest.mark.parametrize("char", list(ILLEGAL_CHARS))
def test_illegal_character_anywhere_is_rejected(char: str) -> None:
    for name in (f"{char}file.txt", f"fi{char}le.txt", f"file.txt{char}"):
        result = validate_filename(name)
        assert not result.is_valid
        assert result.error == MSG_ILLEGAL_CHARS


def test_illegal_characters_message_lists_all_characters() -> None:
    assert MSG_ILLEGAL_CHARS == 'Contains illegal characters: < > : " / \\ | ? *'


@pytest.mark.parametrize("name", ["CON", "con.txt", "LPT1", "Aux.tar.gz", "com9", "nul."])
def test_reserved_names_are_rejected(name: str) -> None:
    result = validate_filename(name)

    assert not result.is_valid
    assert result.error == MSG_RESERVED


@pytest.mark.parametrize("name", ["CONTRACT.txt", "COM10", "LPT0.log", "xcon.txt"])
def test_names_resembling_reserved_names_are_valid(name: str) -> None:
    assert validate_filename(name).is_valid


def test_length_limit_is_255_characters() -> None:
    assert validate_filename("a" * 255).is_valid

    result = validate_filename("a" * 256)
    assert not result.is_valid
    assert result.error == MSG_TOO_LONG == "Filename too long (max 255 characters)"


def test_single_dot_is_invalid_but_double_dot_is_not() -> None:
    result = validate_filename(".")
    assert not result.is_valid
    assert result.error == MSG_INVALID

    assert validate_filename("..").is_valid


@pytest.mark.parametrize("name", ["file.", "file ", "report.pdf "])
def test_trailing_dot_or_space_is_rejected(name: str) -> None:
    result = validate_filename(name)

    assert not result.is_valid
    assert result.error == MSG_TRAILING


def test_first_failing_rule_wins() -> None:
    # 非法字符优先于长度和结尾检查
    assert validate_filename("a" * 300 + "?").error == MSG_ILLEGAL_CHARS
    # 保留名优先于长度
    assert validate_filename("CON." + "a" * 300).error == MSG_RESERVED
    # 长度优先于结尾的点
    assert validate_filename("a" * 256 + ".").error == MSG_TOO_LONG


def test_valid_name_has_no_error() -> None:
    result = validate_filename("vacation photo.jpg")

    assert result.is_valid
    assert result.error is None
    assert validate_filename("vacation photo.jpg") == result
