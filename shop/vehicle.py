"""Vehicle records kept in a doubly linked list."""

from typing import Iterator, Optional

from .errors import VehicleNotFoundError


class Vehicle:
    """A registered customer vehicle; also a node of VehicleList."""

    def __init__(
        self,
        vehicle_id: int,
        customer_id: int,
        customer_name: str,
        model: str,
        plate_number: str,
    ):
        self.vehicle_id = vehicle_id
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.model = model
        self.plate_number = plate_number
        self.next: Optional["Vehicle"] = None
        self.prev: Optional["Vehicle"] = None

    def __repr__(self) -> str:
        return (
            f"Vehicle(vehicle_id={self.vehicle_id}, customer_id={self.customer_id}, "
            f"customer_name={self.customer_name!r}, model={self.model!r}, "
            f"plate_number={self.plate_number!r})"
        )


class VehicleList:
    """
    Doubly linked list of vehicles with a process-owned ID counter.

    The list owns its nodes: callers read them through find() or
    iteration and change them through update().
    """

    UPDATABLE = ("customer_id", "customer_name", "model", "plate_number")

    def __init__(self, next_id: int = 1):
        self.head: Optional[Vehicle] = None
        self.tail: Optional[Vehicle] = None
        self.next_id = next_id

    def __iter__(self) -> Iterator[Vehicle]:
        current = self.head
        while current is not None:
            yield current
            current = current.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def link(self, vehicle: Vehicle) -> Vehicle:
        """Link a node at the tail, keeping its ID."""
        vehicle.next = None
        vehicle.prev = self.tail
        if self.tail is None:
            self.head = vehicle
        else:
            self.tail.next = vehicle
        self.tail = vehicle
        return vehicle

    def append(self, vehicle: Vehicle) -> Vehicle:
        """Assign the next vehicle ID and link at the tail."""
        vehicle.vehicle_id = self.next_id
        self.next_id += 1
        return self.link(vehicle)

    def register(
        self, customer_id: int, customer_name: str, model: str, plate_number: str
    ) -> Vehicle:
        """Create a vehicle and append it."""
        return self.append(Vehicle(0, customer_id, customer_name, model, plate_number))

    def find(self, vehicle_id: int) -> Optional[Vehicle]:
        """Linear scan by vehicle ID."""
        for vehicle in self:
            if vehicle.vehicle_id == vehicle_id:
                return vehicle
        return None

    def get(self, vehicle_id: int) -> Vehicle:
        vehicle = self.find(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    def update(self, vehicle_id: int, **fields) -> Vehicle:
        """Change fields of a vehicle in place. None values are left as they are."""
        vehicle = self.get(vehicle_id)
        for name, value in fields.items():
            if name not in self.UPDATABLE:
                raise TypeError(f"update() got an unexpected field '{name}'")
            if value is not None:
                setattr(vehicle, name, value)
        return vehicle

    def remove(self, vehicle_id: int) -> Vehicle:
        """Unlink a vehicle and return it."""
        vehicle = self.get(vehicle_id)

        if vehicle.prev is not None:
            vehicle.prev.next = vehicle.next
        else:
            self.head = vehicle.next

        if vehicle.next is not None:
            vehicle.next.prev = vehicle.prev
        else:
            self.tail = vehicle.prev

        vehicle.next = None
        vehicle.prev = None
        return vehicle
