import re
from typing import Any

from contenthandler.models.coded_value import CodedValue
from contenthandler.models.handler_binding import TypeFormatCode

# Relaxed validation, just look for something/something
CONTENT_TYPE_PATTERN = re.compile(r"^[\w+\-.]+/[\w+\-.]+$")


def is_valid_content_type(content_type: Any) -> bool:
    return (
        isinstance(content_type, str)
        and CONTENT_TYPE_PATTERN.fullmatch(content_type) is not None
    )


def is_valid_coded_value(coded_value: Any) -> bool:
    return isinstance(coded_value, CodedValue) and not coded_value.is_blank()


def is_valid_type_format_code(key: Any) -> bool:
    return (
        isinstance(key, TypeFormatCode)
        and is_valid_coded_value(key.type_code)
        and is_valid_coded_value(key.format_code)
    )
