"""Record store: list-backed records persisted to flat delimited files.

Two variants share one skeleton:

    StudentStore   id|name|age|course              (no header)
    HeroStore      HeroId,Name,Age,Quirk,Score,Rank,ThreatLevel
                   1,All Might,40,One For All,95.0,S,Critical

The whole backing file is rewritten after every add/update/remove.
"""

from roster.records.errors import (
    MalformedRecordError,
    PersistenceError,
    RecordNotFoundError,
    StoreError,
)
from roster.records.models import Hero, Rank, Student, ThreatLevel, classify
from roster.records.store import HeroStore, RecordStore, StudentStore

__all__ = [
    "Hero",
    "HeroStore",
    "MalformedRecordError",
    "PersistenceError",
    "Rank",
    "RecordNotFoundError",
    "RecordStore",
    "StoreError",
    "Student",
    "StudentStore",
    "ThreatLevel",
    "classify",
]
