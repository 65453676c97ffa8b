#!/usr/bin/env python3
"""Tests for ShopState, the loaded shop tied to its files."""

import io

import pytest

from shop import (
    Appointment,
    DateOutOfRangeError,
    FieldTooLongError,
    PartNotFoundError,
    ServiceDate,
    ShopConfig,
    ShopState,
    VehicleNotFoundError,
    load_vehicles,
)


@pytest.fixture
def config(tmp_path):
    return ShopConfig(data_dir=tmp_path / "files")


@pytest.fixture
def state(config):
    return ShopState.load(config)


class TestLoad:
    def test_creates_data_dir(self, config):
        ShopState.load(config)
        assert config.data_dir.is_dir()

    def test_empty_shop(self, state):
        assert len(state.vehicles) == 0
        assert len(state.parts) == 0
        assert len(state.appointments) == 0
        assert state.appointments.shape == (2051, 13, 32)

    def test_reloads_saved_records(self, config, state):
        state.register_vehicle(1001, "John Doe", "ModelX", "ABC123")
        state.add_part("Filter", "ModelX", 20.0)

        reloaded = ShopState.load(config)

        assert reloaded.vehicles.find(1).plate_number == "ABC123"
        assert reloaded.vehicles.next_id == 2
        assert reloaded.parts.get(1).name == "Filter"
        assert reloaded.parts.next_id == 2


class TestVehicles:
    """Vehicle changes reach the vehicle file."""

    def test_register_appends_record(self, config, state):
        state.register_vehicle(1001, "John Doe", "ModelX", "ABC123")
        state.register_vehicle(1002, "Jane Doe", "ModelY", "XYZ456")
        assert [v.vehicle_id for v in load_vehicles(config.path("vehicles"))] == [1, 2]

    def test_register_rejects_overlong_field(self, config, state):
        with pytest.raises(FieldTooLongError):
            state.register_vehicle(1001, "John Doe", "ModelX", "P" * 30)
        assert len(state.vehicles) == 0
        assert state.vehicles.next_id == 1
        assert not config.path("vehicles").exists()

    def test_update_rewrites_file(self, config, state):
        state.register_vehicle(1001, "John Doe", "ModelX", "ABC123")
        state.update_vehicle(1, customer_name="Johnny", plate_number="NEW1")

        vehicle = load_vehicles(config.path("vehicles")).head
        assert vehicle.customer_name == "Johnny"
        assert vehicle.plate_number == "NEW1"
        assert vehicle.model == "ModelX"
        assert not config.path("vehiclesTemp").exists()

    def test_update_rejects_overlong_field_unchanged(self, state):
        state.register_vehicle(1001, "John Doe", "ModelX", "ABC123")
        with pytest.raises(FieldTooLongError):
            state.update_vehicle(1, model="M" * 40)
        assert state.vehicles.find(1).model == "ModelX"

    def test_delete_rewrites_file(self, config, state):
        for n in range(3):
            state.register_vehicle(1000 + n, f"Customer{n}", "ModelX", f"PLATE{n}")
        state.delete_vehicle(2)
        assert [v.vehicle_id for v in load_vehicles(config.path("vehicles"))] == [1, 3]

    def test_missing_vehicle_raises(self, state):
        with pytest.raises(VehicleNotFoundError):
            state.update_vehicle(5, model="X")
        with pytest.raises(VehicleNotFoundError):
            state.delete_vehicle(5)


class TestParts:
    def test_add_part_writes_line(self, config, state):
        state.add_part("BrakePad", "ModelX", 1200.0)
        assert config.path("parts").read_text() == "1 BrakePad ModelX 1200.0\n"

    def test_add_part_rejects_spaces_without_side_effects(self, config, state):
        with pytest.raises(ValueError):
            state.add_part("Brake Pad", "ModelX", 1200.0)
        assert len(state.parts) == 0
        assert state.parts.next_id == 1

    def test_estimate(self, state):
        state.add_part("Filter", "ModelX", 200)
        state.add_part("Pad", "ModelX", 1000)
        state.add_part("Other", "ModelY", 8000)

        selected, result = state.estimate("ModelX", [1, 2, 2])

        assert [p.name for p in selected] == ["Filter", "Pad", "Pad"]
        assert result.amount_without_labor == pytest.approx(2200)
        assert result.total_amount == pytest.approx(4200)

    def test_estimate_unknown_part(self, state):
        with pytest.raises(PartNotFoundError, match="not found"):
            state.estimate("ModelX", [9])

    def test_estimate_incompatible_part(self, state):
        state.add_part("Other", "ModelY", 8000)
        with pytest.raises(PartNotFoundError, match="fits ModelY"):
            state.estimate("ModelX", [1])


class TestCreateAppointment:
    """Booking writes documents and the appointments file."""

    def test_repair_writes_report_and_warranty(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 14))

        assert "The following operation: Repair" in config.path("history").read_text()
        assert "valid until: 14/12/2023" in config.path("warranty").read_text()
        assert not config.path("maintenance").exists()
        assert config.path("appointments").read_text() == "14 11 2023 John\n"

    def test_maintenance_writes_maintenance_notice(self, config, state):
        state.create_appointment(
            Appointment(1, "John", "Maintenance"), ServiceDate(2023, 11, 14)
        )
        assert "Next maintenance date is : 14/11/2024" in config.path("maintenance").read_text()

    def test_appends_without_duplicates(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 14))
        state.create_appointment(Appointment(2, "Jane", "Repair"), ServiceDate(2023, 11, 15))
        assert config.path("appointments").read_text() == "14 11 2023 John\n15 11 2023 Jane\n"

    def test_after_loading_rewrites_without_duplicates(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 15))

        reloaded = ShopState.load(config, read_appointments=True)
        reloaded.create_appointment(Appointment(2, "Jane", "Repair"), ServiceDate(2023, 11, 14))

        assert config.path("appointments").read_text() == "14 11 2023 Jane\n15 11 2023 John\n"

    def test_out_of_range_writes_nothing(self, tmp_path):
        config = ShopConfig(data_dir=tmp_path, matrix_years=2030)
        state = ShopState.load(config)
        with pytest.raises(DateOutOfRangeError):
            state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2031, 1, 1))
        assert not config.path("history").exists()
        assert not config.path("appointments").exists()


class TestListAppointments:
    def test_lists_from_file(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 14))
        state.create_appointment(Appointment(2, "Jane", "Repair"), ServiceDate(2023, 11, 14))

        out = io.StringIO()
        ShopState.load(config).list_appointments(ServiceDate(2023, 11, 14), out)

        assert out.getvalue() == "Appointments 14.11.2023:\n1. John\n2. Jane\n"

    def test_listing_without_consume_keeps_file(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 14))
        state.list_appointments(ServiceDate(2023, 11, 14), io.StringIO())
        assert config.path("appointments").read_text() == "14 11 2023 John\n"

    def test_listing_without_consume_survives_later_booking(self, config, state):
        """A later booking rewrites the file; unconsumed listings stay in it."""
        state.create_appointment(Appointment(1, "Alice", "Repair"), ServiceDate(2023, 11, 14))

        reloaded = ShopState.load(config, read_appointments=True)
        reloaded.list_appointments(ServiceDate(2023, 11, 14), io.StringIO())
        reloaded.create_appointment(Appointment(2, "Bob", "Repair"), ServiceDate(2023, 11, 20))

        assert config.path("appointments").read_text() == "14 11 2023 Alice\n20 11 2023 Bob\n"

    def test_listing_without_consume_keeps_queue(self, state):
        date = ServiceDate(2023, 11, 14)
        state.create_appointment(Appointment(1, "John", "Repair"), date)
        state.list_appointments(date, io.StringIO())

        out = io.StringIO()
        state.list_appointments(date, out)
        assert out.getvalue() == "Appointments 14.11.2023:\n1. John\n"

    def test_consume_removes_listed_from_file(self, config, state):
        state.create_appointment(Appointment(1, "John", "Repair"), ServiceDate(2023, 11, 14))
        state.create_appointment(Appointment(2, "Jane", "Repair"), ServiceDate(2023, 11, 15))

        state.list_appointments(ServiceDate(2023, 11, 14), io.StringIO(), consume=True)

        assert config.path("appointments").read_text() == "15 11 2023 Jane\n"
        assert not config.path("appointmentsTemp").exists()


class TestFeedback:
    def test_customer_feedback_title(self, config, state):
        state.record_feedback("Great service!")
        assert config.path("feedback").read_text() == "Customer Feedback: Great service!\n\n"

    def test_document_reads_file(self, config, state):
        config.path("commonIssues").write_text("Worn brake pads\n")
        assert state.document("commonIssues") == "Worn brake pads\n"
        assert state.document("history") == ""
