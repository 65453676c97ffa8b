"""
Vehicle service shop records.

This package provides the data models and persistence for a small shop:
- Vehicle / VehicleList: registered vehicles in a doubly linked list
- Part / PartsCatalog: spare parts and tiered labor pricing
- Appointment / AppointmentMatrix: appointments queued by [year][month][day]
- ServiceDate: plain year/month/day triple
- storage: binary vehicle records, text parts and appointment files
- documents: report, warranty, maintenance and feedback text files
- ShopConfig / ShopState: file locations and the loaded shop
"""

from .errors import (
    ShopError,
    ConfigError,
    DateOutOfRangeError,
    FieldTooLongError,
    PartNotFoundError,
    VehicleNotFoundError,
)
from .service_date import ServiceDate
from .vehicle import Vehicle, VehicleList
from .part import Part, PartsCatalog, PriceResult, calculate_total_price, labor_markup
from .appointment import Appointment, AppointmentMatrix
from .storage import (
    append_vehicle,
    load_vehicles,
    rewrite_vehicles,
    write_part,
    load_parts,
    write_appointments,
    read_appointments,
)
from .documents import (
    create_report,
    create_warranty,
    create_maintenance,
    create_feedback,
    display_file_content,
)
from .config import ShopConfig, load_config
from .state import ShopState

__all__ = [
    "ShopError",
    "ConfigError",
    "DateOutOfRangeError",
    "FieldTooLongError",
    "PartNotFoundError",
    "VehicleNotFoundError",
    "ServiceDate",
    "Vehicle",
    "VehicleList",
    "Part",
    "PartsCatalog",
    "PriceResult",
    "calculate_total_price",
    "labor_markup",
    "Appointment",
    "AppointmentMatrix",
    "append_vehicle",
    "load_vehicles",
    "rewrite_vehicles",
    "write_part",
    "load_parts",
    "write_appointments",
    "read_appointments",
    "create_report",
    "create_warranty",
    "create_maintenance",
    "create_feedback",
    "display_file_content",
    "ShopConfig",
    "load_config",
    "ShopState",
]
