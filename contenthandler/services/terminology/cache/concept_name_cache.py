from abc import ABC, abstractmethod
from typing import Callable, List


class ConceptNameCache(ABC):
    """
    Abstract base class for caching concept ids by concept name.

    Logical keys are concept names, e.g. "Unstructured Attachment (LOINC-34133-9)". The
    implementations prefix them with:
        <namespace>:concept:

    An entry is never overwritten once present: `put_if_absent` returns the id that won.
    """

    def __init__(
        self,
        namespace: str = "contenthandler",
        object_ttl_seconds: int | None = None,
    ) -> None:
        self.namespace = namespace
        self.object_ttl_seconds = object_ttl_seconds

    @abstractmethod
    def get(self, name: str) -> int | None: ...

    @abstractmethod
    def put_if_absent(self, name: str, concept_id: int) -> int: ...

    @abstractmethod
    def is_healthy(self) -> bool: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def keys(self) -> List[str]: ...

    def get_or_create(self, name: str, factory: Callable[[], int]) -> int:
        """
        Returns the cached id for the name, resolving and caching it with `factory`
        when it is missing.
        """
        concept_id = self.get(name)
        if concept_id is not None:
            return concept_id

        return self.put_if_absent(name, factory())

    def make_target_id(self, name: str) -> str:
        """Build the physical storage key for a concept name."""
        return f"{self.namespace}:concept:{name}"
