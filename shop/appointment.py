"""Appointment records and the date-indexed appointment table."""

import sys
from collections import Counter, deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional, TextIO, Tuple

from .errors import DateOutOfRangeError
from .service_date import ServiceDate


@dataclass
class Appointment:
    """A booked service visit."""

    vehicle_id: int = 0
    customer_name: str = ""
    appointment_type: str = ""

    @property
    def is_maintenance(self) -> bool:
        return self.appointment_type.strip().lower() == "maintenance"


class AppointmentMatrix:
    """
    Pending appointments indexed by [year][month][day].

    The table is sized (years + 1) x (months + 1) x (days + 1) so date
    components index it directly. Every in-range cell is a FIFO queue;
    queues are only materialized once something is added to them.
    Dates outside the table raise DateOutOfRangeError.
    """

    def __init__(self, years: int, months: int, days: int):
        self.years = years
        self.months = months
        self.days = days
        self._cells: Dict[Tuple[int, int, int], Deque[Appointment]] = {}

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.years + 1, self.months + 1, self.days + 1)

    def contains(self, date: ServiceDate) -> bool:
        """Check whether a date falls inside the table."""
        return (
            0 <= date.year <= self.years
            and 0 <= date.month <= self.months
            and 0 <= date.day <= self.days
        )

    def _key(self, date: ServiceDate) -> Tuple[int, int, int]:
        if not self.contains(date):
            raise DateOutOfRangeError(date, self.shape)
        return (date.year, date.month, date.day)

    def cell(self, date: ServiceDate) -> Deque[Appointment]:
        """
        Return the queue for a date.

        Untouched cells give a fresh empty queue that is not stored in the
        table; use add() to enqueue.
        """
        return self._cells.get(self._key(date), deque())

    def add(self, date: ServiceDate, appointment: Appointment) -> None:
        """Enqueue an appointment at its date."""
        self._cells.setdefault(self._key(date), deque()).append(appointment)

    def drain(self, date: ServiceDate) -> List[Appointment]:
        """Dequeue every pending appointment for a date, oldest first."""
        queue = self._cells.pop(self._key(date), None)
        if not queue:
            return []
        return list(queue)

    def drain_all(self) -> Iterator[Tuple[ServiceDate, Appointment]]:
        """Dequeue every appointment in the table in date order."""
        for key in sorted(self._cells):
            queue = self._cells.pop(key)
            while queue:
                yield ServiceDate(*key), queue.popleft()

    def list_appointments(
        self, date: ServiceDate, out: Optional[TextIO] = None, consume: bool = True
    ) -> List[Appointment]:
        """
        Print and consume the appointments booked for a date.

        Listing drains the queue: a second call for the same date prints
        only the header. With consume=False the queue is left as it was.
        """
        out = out or sys.stdout
        appointments = self.drain(date) if consume else list(self.cell(date))
        out.write(f"Appointments {date.day}.{date.month}.{date.year}:\n")
        for count, appointment in enumerate(appointments, start=1):
            out.write(f"{count}. {appointment.customer_name}\n")
        return appointments

    def pending(self) -> Iterator[Tuple[ServiceDate, Appointment]]:
        """Iterate over pending appointments in date order without consuming them."""
        for key in sorted(self._cells):
            for appointment in self._cells[key]:
                yield ServiceDate(*key), appointment

    def monthly_counts(self) -> Dict[Tuple[int, int], int]:
        """Count pending appointments per (year, month)."""
        counts: Counter = Counter()
        for key, queue in self._cells.items():
            if queue:
                counts[key[:2]] += len(queue)
        return dict(sorted(counts.items()))

    def __len__(self) -> int:
        return sum(len(queue) for queue in self._cells.values())
