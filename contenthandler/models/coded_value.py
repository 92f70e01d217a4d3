from functools import total_ordering
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from contenthandler.exceptions import InvalidArgumentException


@total_ordering
class CodedValue(BaseModel):
    """
    A term from an external terminology, identified by its code and coding scheme.

    The coding scheme name is descriptive only: two coded values are equal (and
    ordered) on (coding_scheme, code).
    """

    model_config = ConfigDict(frozen=True)

    code: str
    coding_scheme: str
    coding_scheme_name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def check_required_parts(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if data.get("code") is None or data.get("coding_scheme") is None:
                raise InvalidArgumentException(
                    "code and coding_scheme are required for a coded value"
                )
        return data

    def identity(self) -> tuple[str, str]:
        return (self.coding_scheme, self.code)

    def is_blank(self) -> bool:
        return self.code == "" or self.coding_scheme == ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodedValue):
            return NotImplemented
        return self.identity() == other.identity()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CodedValue):
            return NotImplemented
        return self.identity() < other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __str__(self) -> str:
        return f"CodedValue [code={self.code}, coding_scheme={self.coding_scheme}, coding_scheme_name={self.coding_scheme_name}]"
