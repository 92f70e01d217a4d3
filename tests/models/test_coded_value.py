import pytest

from contenthandler.exceptions import InvalidArgumentException
from contenthandler.models.coded_value import CodedValue


def test_coded_values_with_same_scheme_and_code_should_be_equal() -> None:
    a = CodedValue(code="34133-9", coding_scheme="LOINC", coding_scheme_name="LOINC")
    b = CodedValue(code="34133-9", coding_scheme="LOINC", coding_scheme_name="something else")

    assert a == b
    assert hash(a) == hash(b)


def test_coded_values_with_different_code_should_not_be_equal() -> None:
    a = CodedValue(code="34133-9", coding_scheme="LOINC")
    b = CodedValue(code="11488-4", coding_scheme="LOINC")

    assert a != b


def test_coded_values_should_order_on_scheme_then_code() -> None:
    values = [
        CodedValue(code="2", coding_scheme="B"),
        CodedValue(code="9", coding_scheme="A"),
        CodedValue(code="1", coding_scheme="B"),
    ]

    assert [v.identity() for v in sorted(values)] == [("A", "9"), ("B", "1"), ("B", "2")]


def test_missing_code_should_raise() -> None:
    with pytest.raises(InvalidArgumentException):
        CodedValue(code=None, coding_scheme="LOINC")  # type: ignore[arg-type]


def test_missing_coding_scheme_should_raise() -> None:
    with pytest.raises(InvalidArgumentException):
        CodedValue(code="34133-9", coding_scheme=None)  # type: ignore[arg-type]


def test_empty_parts_are_accepted_but_blank() -> None:
    value = CodedValue(code="", coding_scheme="LOINC")

    assert value.is_blank()
    assert not CodedValue(code="1", coding_scheme="LOINC").is_blank()


def test_coded_value_should_be_immutable() -> None:
    value = CodedValue(code="1", coding_scheme="LOINC")

    with pytest.raises(Exception):
        value.code = "2"  # type: ignore[misc]


def test_str_should_include_code_and_scheme() -> None:
    value = CodedValue(code="34133-9", coding_scheme="LOINC")

    assert "code=34133-9" in str(value)
    assert "coding_scheme=LOINC" in str(value)
