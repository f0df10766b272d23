"""Record types and the score classification rule."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering


@total_ordering
class _LabeledEnum(Enum):
    """Ordinal category with a textual label used in backing files.

    Members order within their own class only; they never equal ints or
    members of another category.
    """

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_label(cls, label: str) -> _LabeledEnum:
        """Exact, case-sensitive lookup. Raises ValueError for unknown labels."""
        for member in cls:
            if member.label == label:
                return member
        raise ValueError(f"Unknown {cls.__name__} label: {label!r}")

    def __str__(self) -> str:
        return self.label


class Rank(_LabeledEnum):
    C = 1
    B = 2
    A = 3
    S = 4


class ThreatLevel(_LabeledEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.title()


# (floor, rank, threat), highest band first
_BANDS: tuple[tuple[float, Rank, ThreatLevel], ...] = (
    (81, Rank.S, ThreatLevel.CRITICAL),
    (61, Rank.A, ThreatLevel.HIGH),
    (41, Rank.B, ThreatLevel.MEDIUM),
)


def classify(score: float) -> tuple[Rank, ThreatLevel]:
    """Map a score to its (rank, threat level) band.

    Bands are closed on their floor: 81 and up is S/Critical, 61 up to 81 is
    A/High, 41 up to 61 is B/Medium, everything else (NaN included) C/Low.
    """
    for floor, rank, threat in _BANDS:
        if score >= floor:
            return rank, threat
    return Rank.C, ThreatLevel.LOW


@dataclass
class Student:
    id: int
    name: str
    age: int
    course: str

    def __str__(self) -> str:
        return f"ID: {self.id} | Name: {self.name} | Age: {self.age} | Course: {self.course}"


@dataclass
class Hero:
    """A hero record. Rank and threat level always follow the score."""

    id: int
    name: str
    age: int
    quirk: str
    score: float

    @property
    def rank(self) -> Rank:
        return classify(self.score)[0]

    @property
    def threat_level(self) -> ThreatLevel:
        return classify(self.score)[1]

    def __str__(self) -> str:
        return (
            f"ID: {self.id} | Name: {self.name} | Age: {self.age} | Quirk: {self.quirk}"
            f" | Score: {self.score:g} | Rank: {self.rank.label} | Threat: {self.threat_level.label}"
        )
