"""ShopState - the vehicles, parts and appointments of one shop, tied to their files."""

import logging
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from . import documents, storage
from .appointment import Appointment, AppointmentMatrix
from .config import ShopConfig
from .errors import DateOutOfRangeError, PartNotFoundError
from .part import Part, PartsCatalog, PriceResult, calculate_total_price
from .service_date import ServiceDate
from .vehicle import Vehicle, VehicleList

logger = logging.getLogger(__name__)

SERVICE_FEEDBACK = "Service Feedback: "
CUSTOMER_FEEDBACK = "Customer Feedback: "


class ShopState:
    """
    In-memory shop records plus the files that mirror them.

    Built once per run with ShopState.load() and passed to whatever needs it.
    Every mutating method also updates the matching file.
    """

    def __init__(
        self,
        config: ShopConfig,
        vehicles: Optional[VehicleList] = None,
        parts: Optional[PartsCatalog] = None,
        appointments: Optional[AppointmentMatrix] = None,
    ):
        self.config = config
        self.vehicles = vehicles if vehicles is not None else VehicleList()
        self.parts = parts if parts is not None else PartsCatalog()
        if appointments is None:
            appointments = AppointmentMatrix(
                config.matrix_years, config.matrix_months, config.matrix_days
            )
        self.appointments = appointments
        self.appointments_loaded = False

    @classmethod
    def load(cls, config: ShopConfig, read_appointments: bool = False) -> "ShopState":
        """Read vehicles and parts (and optionally appointments) from disk."""
        config.ensure_data_dir()
        state = cls(
            config,
            vehicles=storage.load_vehicles(config.path("vehicles")),
            parts=storage.load_parts(config.path("parts")),
        )
        if read_appointments:
            state.load_appointments()
        logger.debug(
            "Loaded %d vehicles, %d parts, %d appointments from %s",
            len(state.vehicles),
            len(state.parts),
            len(state.appointments),
            config.data_dir,
        )
        return state

    # -------------------------------------------------------------------------
    # Vehicles
    # -------------------------------------------------------------------------

    def register_vehicle(
        self, customer_id: int, customer_name: str, model: str, plate_number: str
    ) -> Vehicle:
        vehicle = Vehicle(0, customer_id, customer_name, model, plate_number)
        # encode first so an oversized field never reaches the list
        storage.encode_vehicle(vehicle)
        self.vehicles.append(vehicle)
        storage.append_vehicle(self.config.path("vehicles"), vehicle)
        return vehicle

    def update_vehicle(self, vehicle_id: int, **fields) -> Vehicle:
        """Change a vehicle and rewrite the vehicle file."""
        vehicle = self.vehicles.get(vehicle_id)
        candidate = Vehicle(
            vehicle.vehicle_id,
            vehicle.customer_id,
            vehicle.customer_name,
            vehicle.model,
            vehicle.plate_number,
        )
        for name, value in fields.items():
            if value is not None:
                setattr(candidate, name, value)
        storage.encode_vehicle(candidate)

        self.vehicles.update(vehicle_id, **fields)
        self.save_vehicles()
        return vehicle

    def delete_vehicle(self, vehicle_id: int) -> Vehicle:
        """Unlink a vehicle and rewrite the vehicle file."""
        vehicle = self.vehicles.remove(vehicle_id)
        self.save_vehicles()
        return vehicle

    def save_vehicles(self) -> None:
        storage.rewrite_vehicles(
            self.vehicles,
            self.config.path("vehiclesTemp"),
            self.config.path("vehicles"),
        )

    # -------------------------------------------------------------------------
    # Parts
    # -------------------------------------------------------------------------

    def add_part(self, name: str, compatible_model: str, price: float) -> Part:
        part = Part(self.parts.next_id, name, compatible_model, price)
        storage.format_part(part)
        self.parts.add(part)
        storage.write_part(self.config.path("parts"), part)
        return part

    def estimate(
        self, model: str, part_ids: Iterable[int]
    ) -> Tuple[List[Part], PriceResult]:
        """
        Price a selection of parts for a vehicle model.

        Part IDs that are unknown or don't fit the model raise PartNotFoundError.
        An ID may be listed more than once.
        """
        selected = []
        for part_id in part_ids:
            part = self.parts.get(part_id)
            if part is None:
                raise PartNotFoundError(f"Part with ID {part_id} not found!")
            if part.compatible_model != model:
                raise PartNotFoundError(
                    f"Part {part_id} ({part.name}) fits {part.compatible_model}, not {model}"
                )
            selected.append(part)
        return selected, calculate_total_price(selected)

    # -------------------------------------------------------------------------
    # Appointments
    # -------------------------------------------------------------------------

    def load_appointments(self) -> int:
        """Read the appointments file into the table. Returns the number read."""
        count = storage.read_appointments(
            self.appointments, self.config.path("appointments")
        )
        self.appointments_loaded = True
        return count

    def create_appointment(self, appointment: Appointment, date: ServiceDate) -> None:
        """
        Book an appointment.

        Appends the history report and warranty notice (plus a maintenance
        notice for maintenance visits) and queues the appointment. If the
        appointments file has not been read, the table only holds unsaved
        appointments and they are appended to it (draining the table);
        otherwise the file is rewritten from the table.
        """
        # reject out-of-range dates before any document is written
        if not self.appointments.contains(date):
            raise DateOutOfRangeError(date, self.appointments.shape)

        documents.create_report(self.config.path("history"), appointment, date)
        documents.create_warranty(self.config.path("warranty"), appointment, date)
        if appointment.is_maintenance:
            documents.create_maintenance(
                self.config.path("maintenance"), appointment, date
            )

        self.appointments.add(date, appointment)
        if self.appointments_loaded:
            self.save_appointments()
        else:
            storage.write_appointments(
                self.appointments, self.config.path("appointments")
            )

    def save_appointments(self) -> None:
        storage.rewrite_appointments(
            self.appointments,
            self.config.path("appointmentsTemp"),
            self.config.path("appointments"),
        )

    def list_appointments(
        self, date: ServiceDate, out: Optional[TextIO] = None, consume: bool = False
    ) -> List[Appointment]:
        """
        Print the appointments for a date.

        Reads the appointments file first if that has not happened yet.
        With consume=True the date is drained and the file is rewritten
        without the listed entries; otherwise both are left untouched.
        """
        if not self.appointments_loaded:
            self.load_appointments()
        listed = self.appointments.list_appointments(
            date, out or sys.stdout, consume=consume
        )
        if consume:
            self.save_appointments()
        return listed

    # -------------------------------------------------------------------------
    # Feedback and documents
    # -------------------------------------------------------------------------

    def record_feedback(self, message: str, title: str = CUSTOMER_FEEDBACK) -> str:
        entry = title + message
        documents.create_feedback(self.config.path("feedback"), entry)
        return entry

    def document(self, key: str) -> str:
        """Text of a document file such as "history" or "warranty"."""
        return documents.display_file_content(self.config.path(key))
