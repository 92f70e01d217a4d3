from pydantic import BaseModel, ConfigDict

from contenthandler.models.coded_value import CodedValue
from contenthandler.models.content import Content


class TypeFormatCode(BaseModel):
    """Registry key made of a type code and a format code"""

    model_config = ConfigDict(frozen=True)

    type_code: CodedValue | None
    format_code: CodedValue | None

    def __hash__(self) -> int:
        return hash((self.type_code, self.format_code))


class HandlerBinding(BaseModel):
    """
    The immutable configuration a handler is bound to: either a content type or a
    type/format code pair. An empty binding matches any content.
    """

    model_config = ConfigDict(frozen=True)

    content_type: str | None = None
    type_code: CodedValue | None = None
    format_code: CodedValue | None = None

    @classmethod
    def for_content_type(cls, content_type: str | None) -> "HandlerBinding":
        return cls(content_type=content_type)

    @classmethod
    def for_codes(
        cls, type_code: CodedValue | None, format_code: CodedValue | None
    ) -> "HandlerBinding":
        return cls(type_code=type_code, format_code=format_code)

    def is_coded(self) -> bool:
        return self.type_code is not None or self.format_code is not None

    def title(self) -> str | None:
        if self.content_type:
            return self.content_type
        if self.type_code is not None and self.format_code is not None:
            return f"{_code_label(self.type_code)}:{_code_label(self.format_code)}"
        return None

    def matches(self, content: Content) -> bool:
        if self.content_type:
            return content.content_type == self.content_type
        if self.is_coded():
            return (
                content.type_code == self.type_code
                and content.format_code == self.format_code
            )
        return True


def _code_label(coded_value: CodedValue) -> str:
    return f"{coded_value.coding_scheme}-{coded_value.code}"
