#!/usr/bin/env python3
"""
Unified CLI for the vehicle service shop.

Commands:
  register     - Register a customer vehicle
  update       - Change a registered vehicle
  delete       - Remove a registered vehicle
  vehicles     - List registered vehicles
  history      - Show the service history
  book         - Create a service appointment
  appointments - List (and consume) the appointments for a date
  agenda       - Show every pending appointment
  add-part     - Add a part to the inventory
  parts        - List parts, optionally for one model
  estimate     - Price parts plus labor for a model
  feedback     - Record service or customer feedback
  warranties   - Show warranty expiration notices
  reminders    - Show preventive maintenance reminders
  issues       - Show common issues
  stats        - Pending appointments per month
"""

import argparse
import logging
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional, Sequence, Tuple, TypeVar

from shop import (
    Appointment,
    Part,
    ServiceDate,
    ShopError,
    ShopState,
    Vehicle,
    load_config,
)
from shop.state import CUSTOMER_FEEDBACK, SERVICE_FEEDBACK

PAGE_SIZE = 14

T = TypeVar("T")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_price(price: Optional[float]) -> str:
    """Format a price for display."""
    return f"{price:,.2f}" if price is not None else "-"


def truncate(text: Optional[str], max_len: int = 20) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def paginate(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> Tuple[List[T], int]:
    """Return the items on a 1-based page and the total page count."""
    total_pages = max(1, (len(items) + page_size - 1) // page_size)
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), total_pages


def parse_date(text: str) -> ServiceDate:
    """argparse type for d/m/yyyy or yyyy-mm-dd dates."""
    try:
        return ServiceDate.parse(text)
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError(f"invalid date: {text!r}")


def print_document(title: str, text: str, empty: str) -> None:
    print(title)
    print()
    print(text if text else empty)


# =============================================================================
# Vehicle commands
# =============================================================================


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    return [
        [
            str(v.vehicle_id),
            str(v.customer_id),
            truncate(v.customer_name),
            truncate(v.model),
            v.plate_number,
        ]
        for v in vehicles
    ]


def cmd_register(args, state: ShopState):
    """Register a customer vehicle."""
    vehicle = state.register_vehicle(
        args.customer_id, args.customer_name, args.model, args.plate
    )
    print(f"Registered vehicle {vehicle.vehicle_id}:")
    print(f"  Customer: {vehicle.customer_name} ({vehicle.customer_id})")
    print(f"  Model:    {vehicle.model}")
    print(f"  Plate:    {vehicle.plate_number}")
    return 0


def cmd_update(args, state: ShopState):
    """Change a registered vehicle."""
    fields = {
        "customer_id": args.customer_id,
        "customer_name": args.customer_name,
        "model": args.model,
        "plate_number": args.plate,
    }
    if all(value is None for value in fields.values()):
        print("Error: nothing to update (use --customer-id, --name, --model or --plate)")
        return 1

    vehicle = state.update_vehicle(args.vehicle_id, **fields)
    print("Vehicle has been updated.")
    print(tabulate(make_vehicle_table([vehicle]), headers=VEHICLE_HEADERS, tablefmt="simple"))
    return 0


def cmd_delete(args, state: ShopState):
    """Remove a registered vehicle."""
    state.delete_vehicle(args.vehicle_id)
    print(f"Vehicle with ID {args.vehicle_id} has been deleted.")
    return 0


VEHICLE_HEADERS = ["Vehicle ID", "Customer ID", "Customer Name", "Vehicle Model", "Plate Number"]


def cmd_vehicles(args, state: ShopState):
    """List registered vehicles."""
    vehicles = list(state.vehicles)
    print(f"Vehicles: {len(vehicles)}")
    print()
    if not vehicles:
        print("No vehicles registered.")
        return 0

    rows, total_pages = paginate(vehicles, args.page)
    print(tabulate(make_vehicle_table(rows), headers=VEHICLE_HEADERS, tablefmt="simple"))
    print()
    print(f"Page {min(max(args.page, 1), total_pages)} of {total_pages}")
    return 0


def cmd_history(args, state: ShopState):
    """Show the service history."""
    print_document("Service History", state.document("history"), "No services recorded.")
    return 0


# =============================================================================
# Appointment commands
# =============================================================================


def cmd_book(args, state: ShopState):
    """Create a service appointment."""
    appointment = Appointment(args.vehicle_id, args.customer_name, args.type)
    if state.vehicles.find(args.vehicle_id) is None:
        print(f"Warning: vehicle {args.vehicle_id} is not registered")

    print(f"Booking appointment for {args.date}:")
    print(f"  Customer: {appointment.customer_name}")
    print(f"  Vehicle:  {appointment.vehicle_id}")
    print(f"  Type:     {appointment.appointment_type}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    state.create_appointment(appointment, args.date)
    print("Appointment saved.")
    return 0


def cmd_appointments(args, state: ShopState):
    """List the appointments for a date. Listing consumes them."""
    state.list_appointments(args.date, consume=args.consume)
    return 0


def make_agenda_table(pending) -> List[List[str]]:
    """Convert (date, appointment) pairs to table rows."""
    return [[str(date), appt.customer_name] for date, appt in pending]


def cmd_agenda(args, state: ShopState):
    """Show every pending appointment without consuming any."""
    state.load_appointments()
    pending = list(state.appointments.pending())
    if not pending:
        print("No pending appointments.")
        return 0
    print(tabulate(make_agenda_table(pending), headers=["Date", "Customer Name"], tablefmt="simple"))
    return 0


def make_stats_table(counts) -> List[List[str]]:
    """Convert {(year, month): count} to table rows."""
    return [[f"{year}-{month:02d}", str(count)] for (year, month), count in counts.items()]


def cmd_stats(args, state: ShopState):
    """Pending appointments per month."""
    state.load_appointments()
    counts = state.appointments.monthly_counts()
    print("Monthly Service Stats")
    print()
    if not counts:
        print("No pending appointments.")
        return 0
    print(tabulate(make_stats_table(counts), headers=["Month", "Appointments"], tablefmt="simple"))
    print()
    print(f"Total: {sum(counts.values())}")
    return 0


# =============================================================================
# Parts commands
# =============================================================================


PART_HEADERS = ["Part ID", "Part Name", "Vehicle Model", "Price"]


def make_parts_table(parts: List[Part]) -> List[List[str]]:
    """Convert parts to table rows."""
    return [
        [str(p.part_id), truncate(p.name), truncate(p.compatible_model), format_price(p.price)]
        for p in parts
    ]


def cmd_add_part(args, state: ShopState):
    """Add a part to the inventory."""
    try:
        part = state.add_part(args.name, args.model, args.price)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print(f"Part successfully added (ID {part.part_id}).")
    return 0


def cmd_parts(args, state: ShopState):
    """List parts, optionally only those for one model."""
    if args.model:
        parts = state.parts.compatible_with(args.model)
        print(f"Parts for {args.model}: {len(parts)}")
    else:
        parts = list(state.parts)
        print(f"Parts: {len(parts)}")
    print()

    if not parts:
        print("No parts found.")
        return 0

    rows, total_pages = paginate(parts, args.page)
    print(tabulate(make_parts_table(rows), headers=PART_HEADERS, tablefmt="simple"))
    print()
    print(f"Page {min(max(args.page, 1), total_pages)} of {total_pages}")
    return 0


def cmd_estimate(args, state: ShopState):
    """Price selected parts plus labor for a vehicle model."""
    if not args.part_ids:
        compatible = state.parts.compatible_with(args.model)
        if not compatible:
            print(f"No parts found for {args.model}.")
            return 0
        print(f"Parts for {args.model} (pass part IDs to estimate):")
        print(tabulate(make_parts_table(compatible), headers=PART_HEADERS, tablefmt="simple"))
        return 0

    selected, result = state.estimate(args.model, args.part_ids)
    print("Selected parts:")
    print(tabulate(make_parts_table(selected), headers=PART_HEADERS, tablefmt="simple"))
    print()
    print(f"Parts       : {format_price(result.amount_without_labor)}")
    print(f"Labor Fee   : {format_price(result.labor)}")
    print(f"Total Amount: {format_price(result.total_amount)}")
    return 0


# =============================================================================
# Feedback and document commands
# =============================================================================


def cmd_feedback(args, state: ShopState):
    """Record service or customer feedback."""
    title = SERVICE_FEEDBACK if args.service else CUSTOMER_FEEDBACK
    state.record_feedback(" ".join(args.message), title)
    print("Thank you for your feedback.")
    return 0


def cmd_warranties(args, state: ShopState):
    print_document("Warranty Expirations", state.document("warranty"), "No warranties issued.")
    return 0


def cmd_reminders(args, state: ShopState):
    print_document(
        "Next Maintenance Dates", state.document("maintenance"), "No maintenance scheduled."
    )
    return 0


def cmd_issues(args, state: ShopState):
    print_document("Common issues", state.document("commonIssues"), "No common issues recorded.")
    return 0


COMMANDS = {
    "register": cmd_register,
    "update": cmd_update,
    "delete": cmd_delete,
    "vehicles": cmd_vehicles,
    "history": cmd_history,
    "book": cmd_book,
    "appointments": cmd_appointments,
    "agenda": cmd_agenda,
    "add-part": cmd_add_part,
    "parts": cmd_parts,
    "estimate": cmd_estimate,
    "feedback": cmd_feedback,
    "warranties": cmd_warranties,
    "reminders": cmd_reminders,
    "issues": cmd_issues,
    "stats": cmd_stats,
}


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle service shop manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s register 1001 JohnDoe ModelX ABC123
  %(prog)s update 1 --plate XYZ789
  %(prog)s book 1 JohnDoe Maintenance 14/11/2023
  %(prog)s appointments 14/11/2023 --consume
  %(prog)s add-part BrakePad ModelX 1200
  %(prog)s estimate ModelX 1 3
  %(prog)s --config shop/garage.yaml stats
""",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to shop config YAML (default: $GARAGE_CONFIG or ./garage.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Register subcommand
    register_parser = subparsers.add_parser("register", help="Register a customer vehicle")
    register_parser.add_argument("customer_id", type=int, help="Customer ID")
    register_parser.add_argument("customer_name", type=str, help="Customer name")
    register_parser.add_argument("model", type=str, help="Vehicle model")
    register_parser.add_argument("plate", type=str, help="Plate number")

    # Update subcommand
    update_parser = subparsers.add_parser("update", help="Change a registered vehicle")
    update_parser.add_argument("vehicle_id", type=int, help="Vehicle ID")
    update_parser.add_argument("--customer-id", type=int, help="New customer ID")
    update_parser.add_argument("--name", dest="customer_name", type=str, help="New customer name")
    update_parser.add_argument("--model", type=str, help="New vehicle model")
    update_parser.add_argument("--plate", type=str, help="New plate number")

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Remove a registered vehicle")
    delete_parser.add_argument("vehicle_id", type=int, help="Vehicle ID")

    # Vehicles subcommand
    vehicles_parser = subparsers.add_parser("vehicles", help="List registered vehicles")
    vehicles_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    subparsers.add_parser("history", help="Show the service history")

    # Book subcommand
    book_parser = subparsers.add_parser("book", help="Create a service appointment")
    book_parser.add_argument("vehicle_id", type=int, help="Vehicle ID")
    book_parser.add_argument("customer_name", type=str, help="Customer name")
    book_parser.add_argument(
        "type", type=str, help="Appointment type (e.g. 'Repair', 'Maintenance')"
    )
    book_parser.add_argument("date", type=parse_date, help="Date (d/m/yyyy or yyyy-mm-dd)")
    book_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be booked without saving"
    )

    # Appointments subcommand
    appointments_parser = subparsers.add_parser(
        "appointments", help="List the appointments for a date"
    )
    appointments_parser.add_argument("date", type=parse_date, help="Date (d/m/yyyy or yyyy-mm-dd)")
    appointments_parser.add_argument(
        "--consume",
        action="store_true",
        help="Remove the listed appointments from the appointments file",
    )

    subparsers.add_parser("agenda", help="Show every pending appointment")

    # Add Part subcommand
    add_part_parser = subparsers.add_parser("add-part", help="Add a part to the inventory")
    add_part_parser.add_argument("name", type=str, help="Part name (one word)")
    add_part_parser.add_argument("model", type=str, help="Compatible vehicle model (one word)")
    add_part_parser.add_argument("price", type=float, help="Part price")

    # Parts subcommand
    parts_parser = subparsers.add_parser("parts", help="List parts")
    parts_parser.add_argument("--model", type=str, help="Only parts compatible with this model")
    parts_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    # Estimate subcommand
    estimate_parser = subparsers.add_parser(
        "estimate", help="Price parts plus labor for a vehicle model"
    )
    estimate_parser.add_argument("model", type=str, help="Vehicle model")
    estimate_parser.add_argument(
        "part_ids", type=int, nargs="*", help="Part IDs to include (repeat to add twice)"
    )

    # Feedback subcommand
    feedback_parser = subparsers.add_parser("feedback", help="Record feedback")
    feedback_parser.add_argument("message", nargs="+", help="Feedback text")
    feedback_parser.add_argument(
        "--service", action="store_true", help="Record as service feedback"
    )

    subparsers.add_parser("warranties", help="Show warranty expiration notices")
    subparsers.add_parser("reminders", help="Show preventive maintenance reminders")
    subparsers.add_parser("issues", help="Show common issues")
    subparsers.add_parser("stats", help="Pending appointments per month")

    return parser


def main(argv: Optional[Sequence[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        state = ShopState.load(config)
        return COMMANDS[args.command](args, state)
    except ShopError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
