"""Text documents appended for each appointment: report, warranty, maintenance, feedback."""

from pathlib import Path
from typing import Union

from .appointment import Appointment
from .service_date import ServiceDate

PathLike = Union[str, Path]

WARRANTY_MONTHS = 1
MAINTENANCE_YEARS = 1


def _performed(appointment: Appointment, date: ServiceDate) -> str:
    return (
        f" | {appointment.customer_name} with vehicle ID {appointment.vehicle_id}, "
        f"on this date: {date}\n"
    )


def format_report(appointment: Appointment, date: ServiceDate) -> str:
    return (
        f" | The following operation: {appointment.appointment_type}, "
        f"performed to the customer : \n" + _performed(appointment, date)
    )


def warranty_expiration(date: ServiceDate) -> ServiceDate:
    """Warranties run one calendar month; the day is carried over unchanged."""
    return date.plus_months(WARRANTY_MONTHS)


def format_warranty(appointment: Appointment, date: ServiceDate) -> str:
    return (
        f" | {appointment.appointment_type}, performed to the customer : \n"
        + _performed(appointment, date)
        + f" | Warranty for repair valid until: {warranty_expiration(date)}\n"
    )


def next_maintenance(date: ServiceDate) -> ServiceDate:
    return date.plus_years(MAINTENANCE_YEARS)


def format_maintenance(appointment: Appointment, date: ServiceDate) -> str:
    return (
        " | Maintenance appointment performed for the customer  \n"
        + _performed(appointment, date)
        + f" | Next maintenance date is : {next_maintenance(date)}\n"
    )


def _append_stanza(filename: PathLike, text: str) -> None:
    with open(filename, "a") as fp:
        fp.write(text + "\n")


def create_report(filename: PathLike, appointment: Appointment, date: ServiceDate) -> None:
    """Append a service report to the history file."""
    _append_stanza(filename, format_report(appointment, date))


def create_warranty(
    filename: PathLike, appointment: Appointment, date: ServiceDate
) -> None:
    """Append a warranty notice valid for one month after the service date."""
    _append_stanza(filename, format_warranty(appointment, date))


def create_maintenance(
    filename: PathLike, appointment: Appointment, date: ServiceDate
) -> None:
    """Append a maintenance notice with the next due date one year out."""
    _append_stanza(filename, format_maintenance(appointment, date))


def create_feedback(filename: PathLike, message: str) -> None:
    _append_stanza(filename, message + "\n")


def display_file_content(filename: PathLike) -> str:
    """Return a document file's text, or an empty string if it does not exist."""
    try:
        with open(filename, "r") as fp:
            return "".join(line.rstrip("\n") + "\n" for line in fp)
    except FileNotFoundError:
        return ""
