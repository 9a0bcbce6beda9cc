"""
Data models for iso-chooser-menu.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .constants import MAX_IMAGE_SIZE
from .errors import ChoiceSetError, IncompleteRecordError


@dataclass(slots=True, frozen=True)
class ImageRecord:
    """One selectable installation image."""

    url: str
    label: str
    checksum: str
    size: int

    def __post_init__(self):
        """Refuse to build a record with any field unpopulated."""
        for name in ("url", "label", "checksum"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise IncompleteRecordError(name)
        # bool is an int subclass, but never a byte count
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise IncompleteRecordError("size")
        if not 0 <= self.size <= MAX_IMAGE_SIZE:
            raise IncompleteRecordError("size")


class ChoiceSet(Sequence[ImageRecord]):
    """Ordered, immutable collection of one ImageRecord per input feed."""

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[ImageRecord]):
        self._records: Tuple[ImageRecord, ...] = tuple(records)
        if not self._records:
            raise ChoiceSetError("no installation images to choose from")

    def __getitem__(self, index):  # type: ignore[override]
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"ChoiceSet({list(self._records)!r})"

    @property
    def labels(self) -> List[str]:
        """Display labels in choice order."""
        return [record.label for record in self._records]

    @property
    def widest_label(self) -> int:
        """Length of the longest label."""
        return max(len(label) for label in self.labels)
