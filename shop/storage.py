"""File persistence for vehicles, parts and appointments."""

import logging
import os
import struct
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from .appointment import Appointment, AppointmentMatrix
from .errors import DateOutOfRangeError, FieldTooLongError
from .part import Part, PartsCatalog
from .service_date import ServiceDate
from .vehicle import Vehicle, VehicleList

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# vehicle_id, customer_id, customer_name, model, plate_number
VEHICLE_RECORD = struct.Struct("<iq64s32s24s")
VEHICLE_RECORD_SIZE = VEHICLE_RECORD.size  # 132 bytes
TEXT_ENCODING = "utf-8"


# =============================================================================
# Vehicle records
# =============================================================================


def _fit(value: str, width: int, field: str) -> bytes:
    """Encode a string into a fixed-width, NUL padded slot."""
    raw = value.encode(TEXT_ENCODING)
    if len(raw) > width:
        raise FieldTooLongError(f"{field} is {len(raw)} bytes, the limit is {width}")
    return raw.ljust(width, b"\x00")


def _unfit(raw: bytes) -> str:
    return raw.rstrip(b"\x00").decode(TEXT_ENCODING, errors="replace")


def encode_vehicle(vehicle: Vehicle) -> bytes:
    """Serialize a vehicle to one fixed-size record. Links are not stored."""
    name = _fit(vehicle.customer_name, 64, "customer name")
    model = _fit(vehicle.model, 32, "model")
    plate = _fit(vehicle.plate_number, 24, "plate number")
    try:
        return VEHICLE_RECORD.pack(vehicle.vehicle_id, vehicle.customer_id, name, model, plate)
    except struct.error as e:
        raise FieldTooLongError(f"vehicle or customer ID out of range: {e}") from e


def decode_vehicle(record: bytes) -> Vehicle:
    """Rebuild an unlinked vehicle from one record."""
    vehicle_id, customer_id, name, model, plate = VEHICLE_RECORD.unpack(record)
    return Vehicle(vehicle_id, customer_id, _unfit(name), _unfit(model), _unfit(plate))


def append_vehicle(filename: PathLike, vehicle: Vehicle) -> None:
    """
    Append one vehicle record to the vehicle file.

    Not crash safe: an interrupted write leaves a short record that ends
    the next load early.
    """
    record = encode_vehicle(vehicle)
    with open(filename, "ab") as fp:
        fp.write(record)


def rewrite_vehicles(
    vehicles: Iterable[Vehicle], temp_filename: PathLike, filename: PathLike
) -> None:
    """
    Replace the vehicle file with the given vehicles.

    Writes everything to the temp file first, then removes the old file
    and renames the temp file into its place.
    """
    with open(temp_filename, "wb") as fp:
        for vehicle in vehicles:
            fp.write(encode_vehicle(vehicle))

    _swap(temp_filename, filename)


def iter_vehicle_records(filename: PathLike) -> Iterator[Vehicle]:
    """Yield vehicles in file order until a short read."""
    try:
        fp = open(filename, "rb")
    except FileNotFoundError:
        return
    with fp:
        while True:
            record = fp.read(VEHICLE_RECORD_SIZE)
            if len(record) < VEHICLE_RECORD_SIZE:
                if record:
                    logger.warning(
                        "Ignoring %d trailing bytes in %s", len(record), filename
                    )
                return
            yield decode_vehicle(record)


def load_vehicles(filename: PathLike) -> VehicleList:
    """
    Load the vehicle file into a new linked list.

    Links follow file order. The ID counter continues from the last
    record read, even if an earlier record had a higher ID.
    """
    vehicles = VehicleList()
    for vehicle in iter_vehicle_records(filename):
        vehicles.link(vehicle)
        vehicles.next_id = vehicle.vehicle_id + 1
    return vehicles


def _swap(temp_filename: PathLike, filename: PathLike) -> None:
    """Move a freshly written temp file over the real one."""
    if os.path.exists(filename):
        os.remove(filename)
    os.rename(temp_filename, filename)


# =============================================================================
# Parts
# =============================================================================


def _token(value: str, field: str) -> str:
    if not value or len(value.split()) != 1:
        raise ValueError(f"{field} must be a single word without spaces: {value!r}")
    return value


def format_part(part: Part) -> str:
    """One parts file line: id name model price."""
    name = _token(part.name, "part name")
    model = _token(part.compatible_model, "compatible model")
    return f"{part.part_id} {name} {model} {part.price}"


def write_part(filename: PathLike, part: Part) -> None:
    """Append a part to the parts file."""
    line = format_part(part)
    with open(filename, "a") as fp:
        fp.write(line + "\n")


def load_parts(filename: PathLike) -> PartsCatalog:
    """
    Load the parts file.

    Lines are "id name model price". Three-token "name model price" lines
    written by older versions carry no ID and get fresh ones.
    """
    catalog = PartsCatalog()
    legacy = []
    try:
        fp = open(filename, "r")
    except FileNotFoundError:
        return catalog

    with fp:
        for line in fp:
            tokens = line.split()
            if not tokens:
                continue
            try:
                if len(tokens) == 4:
                    part_id, name, model, price = tokens
                    catalog.put(Part(int(part_id), name, model, float(price)))
                elif len(tokens) == 3:
                    name, model, price = tokens
                    legacy.append(Part(0, name, model, float(price)))
                else:
                    raise ValueError(f"expected 3 or 4 fields, got {len(tokens)}")
            except ValueError:
                logger.warning("Incorrect file format: %s", line.rstrip("\n"))

    for part in legacy:
        catalog.add(part)
    if legacy:
        logger.info("Assigned new IDs to %d legacy parts from %s", len(legacy), filename)
    return catalog


# =============================================================================
# Appointments
# =============================================================================


def format_appointment(date: ServiceDate, appointment: Appointment) -> str:
    return f"{date.day} {date.month} {date.year} {appointment.customer_name}"


def parse_appointment(line: str) -> Tuple[ServiceDate, Appointment]:
    """Parse "day month year name"; raises ValueError on a bad line."""
    tokens = line.split(maxsplit=3)
    if len(tokens) < 4:
        raise ValueError(f"expected 4 fields, got {len(tokens)}")
    day, month, year = (int(t) for t in tokens[:3])
    name = tokens[3].strip()
    return ServiceDate(year, month, day), Appointment(customer_name=name)


def write_appointments(matrix: AppointmentMatrix, filename: PathLike) -> int:
    """
    Append every pending appointment to the file, draining the table.

    Returns the number of lines written.
    """
    count = 0
    with open(filename, "a") as fp:
        for date, appointment in matrix.drain_all():
            fp.write(format_appointment(date, appointment) + "\n")
            count += 1
    return count


def read_appointments(matrix: AppointmentMatrix, filename: PathLike) -> int:
    """
    Add every appointment in the file to the table.

    Malformed lines are logged and skipped. Returns the number added.
    """
    count = 0
    try:
        fp = open(filename, "r")
    except FileNotFoundError:
        return count

    with fp:
        for line in fp:
            if not line.strip():
                continue
            try:
                date, appointment = parse_appointment(line)
                matrix.add(date, appointment)
            except ValueError:
                logger.warning("Incorrect file format: %s", line.rstrip("\n"))
                continue
            except DateOutOfRangeError as e:
                logger.warning("Skipping appointment: %s", e)
                continue
            count += 1
    return count


def rewrite_appointments(
    matrix: AppointmentMatrix, temp_filename: PathLike, filename: PathLike
) -> int:
    """
    Replace the appointments file with what the table holds.

    Unlike write_appointments this leaves the table untouched.
    """
    count = 0
    with open(temp_filename, "w") as fp:
        for date, appointment in matrix.pending():
            fp.write(format_appointment(date, appointment) + "\n")
            count += 1
    _swap(temp_filename, filename)
    return count
