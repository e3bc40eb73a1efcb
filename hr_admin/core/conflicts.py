"""
Reservation conflict detection.

Two closed date intervals overlap when they share at least one date, which
covers partial overlap, containment, exact match and touching boundaries.
"""

import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional

from hr_admin.core.errors import ConflictError, InvalidInputError, InvalidRangeError, Result


class ReservationStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESERVED = "RESERVED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


BLOCKING_STATUSES = frozenset({ReservationStatus.RESERVED, ReservationStatus.APPROVED})


@dataclass(frozen=True)
class DateInterval:
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")

    @classmethod
    def of(cls, start: Optional[date], end: Optional[date]) -> Result["DateInterval"]:
        if start is None or end is None:
            return Result.failure(InvalidInputError("Start date and end date are required"))
        if start > end:
            return Result.failure(InvalidRangeError(f"Start date {start} is after end date {end}"))
        return Result.success(cls(start, end))

    def overlaps(self, other: "DateInterval") -> bool:
        return intervals_overlap(self, other)


@dataclass(frozen=True)
class ReservationRecord:
    record_id: Any
    owner_id: Any
    interval: DateInterval
    status: ReservationStatus
    is_active: bool = True

    @property
    def blocks(self) -> bool:
        return self.is_active and self.status in BLOCKING_STATUSES


def intervals_overlap(a: DateInterval, b: DateInterval) -> bool:
    return a.start <= b.end and b.start <= a.end


def _competitors(owner_id, existing: Iterable[ReservationRecord], exclude_record_id):
    for record in existing:
        if record.owner_id != owner_id or not record.blocks:
            continue
        if exclude_record_id is not None and record.record_id == exclude_record_id:
            continue
        yield record


def has_overlap(
    owner_id: Any,
    candidate: DateInterval,
    existing: Iterable[ReservationRecord],
    exclude_record_id: Any = None,
) -> bool:
    """True as soon as one active, blocking record of ``owner_id`` overlaps ``candidate``."""
    return any(
        intervals_overlap(candidate, record.interval)
        for record in _competitors(owner_id, existing, exclude_record_id)
    )


def find_conflicts(
    owner_id: Any,
    candidate: DateInterval,
    existing: Iterable[ReservationRecord],
    exclude_record_id: Any = None,
) -> List[ReservationRecord]:
    """Every blocking record of ``owner_id`` that overlaps ``candidate``, ordered by start date."""
    conflicts = [
        record
        for record in _competitors(owner_id, existing, exclude_record_id)
        if intervals_overlap(candidate, record.interval)
    ]
    return sorted(conflicts, key=lambda r: (r.interval.start, r.interval.end))


def check_reservation(
    owner_id: Any,
    candidate: DateInterval,
    existing: Iterable[ReservationRecord],
    exclude_record_id: Any = None,
) -> Result[DateInterval]:
    conflicts = find_conflicts(owner_id, candidate, existing, exclude_record_id)
    if conflicts:
        first = conflicts[0].interval
        return Result.failure(
            ConflictError(
                f"Period {candidate.start} to {candidate.end} overlaps an existing "
                f"reservation from {first.start} to {first.end}"
            )
        )
    return Result.success(candidate)
