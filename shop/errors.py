"""Exception types raised by the shop package."""


class ShopError(Exception):
    """Base class for errors the CLI reports to the user."""


class DateOutOfRangeError(ShopError, IndexError):
    """Date components fall outside the appointment table."""

    def __init__(self, date, shape):
        self.date = date
        self.shape = shape
        super().__init__(
            f"date out of range: {date} (table holds years 0-{shape[0] - 1}, "
            f"months 0-{shape[1] - 1}, days 0-{shape[2] - 1})"
        )


class VehicleNotFoundError(ShopError, LookupError):
    """No vehicle with the requested ID."""

    def __init__(self, vehicle_id: int):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle with ID {vehicle_id} not found!")


class FieldTooLongError(ShopError, ValueError):
    """A value does not fit its fixed-width slot in a vehicle record."""


class ConfigError(ShopError):
    """Config file could not be parsed or failed schema validation."""


class PartNotFoundError(ShopError, LookupError):
    """No part with the requested ID among the parts offered."""
