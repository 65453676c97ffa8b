#!/usr/bin/env python3
"""Tests for the appointment table."""

import io

import pytest

from shop import Appointment, AppointmentMatrix, DateOutOfRangeError, ServiceDate


@pytest.fixture
def matrix():
    return AppointmentMatrix(2050, 13, 30)


class TestInitialize:
    """Tests for table sizing."""

    def test_shape_is_one_larger_per_dimension(self):
        matrix = AppointmentMatrix(2, 6, 10)
        assert matrix.shape == (3, 7, 11)

    def test_every_cell_starts_empty(self):
        matrix = AppointmentMatrix(2, 6, 10)
        for year in range(3):
            for month in range(7):
                for day in range(11):
                    assert len(matrix.cell(ServiceDate(year, month, day))) == 0
        assert len(matrix) == 0

    def test_looking_up_a_cell_stores_nothing(self, matrix):
        date = ServiceDate(2023, 11, 14)
        matrix.cell(date).append(Appointment(1, "John", "Repair"))
        assert len(matrix) == 0
        assert list(matrix.pending()) == []

    def test_upper_bounds_are_inclusive(self):
        matrix = AppointmentMatrix(2, 6, 10)
        assert matrix.contains(ServiceDate(2, 6, 10))
        assert not matrix.contains(ServiceDate(3, 6, 10))
        assert not matrix.contains(ServiceDate(2, 7, 10))
        assert not matrix.contains(ServiceDate(2, 6, 11))
        assert not matrix.contains(ServiceDate(2, 6, -1))


class TestAdd:
    """Tests for AppointmentMatrix.add."""

    def test_add_places_at_date(self, matrix):
        matrix.add(ServiceDate(2023, 11, 14), Appointment(1, "John Doe", "Repair"))
        assert matrix.cell(ServiceDate(2023, 11, 14))[0].customer_name == "John Doe"

    def test_out_of_range_raises(self, matrix):
        with pytest.raises(DateOutOfRangeError):
            matrix.add(ServiceDate(2023, 14, 1), Appointment(1, "John", "Repair"))

    def test_out_of_range_is_an_index_error(self, matrix):
        with pytest.raises(IndexError):
            matrix.add(ServiceDate(2051, 1, 1), Appointment(1, "John", "Repair"))

    def test_out_of_range_leaves_table_unchanged(self, matrix):
        matrix.add(ServiceDate(2023, 11, 14), Appointment(1, "John", "Repair"))
        with pytest.raises(DateOutOfRangeError):
            matrix.add(ServiceDate(2023, 11, 31), Appointment(2, "Jane", "Repair"))
        assert len(matrix) == 1


class TestListAppointments:
    """Listing prints in FIFO order and drains the date."""

    def test_prints_header_and_names(self, matrix):
        date = ServiceDate(2023, 11, 14)
        matrix.add(date, Appointment(1, "John Doe", "Repair"))
        out = io.StringIO()
        matrix.list_appointments(date, out)
        assert out.getvalue() == "Appointments 14.11.2023:\n1. John Doe\n"

    def test_fifo_order(self, matrix):
        date = ServiceDate(2023, 11, 14)
        for name in ("First", "Second", "Third"):
            matrix.add(date, Appointment(1, name, "Repair"))
        listed = matrix.list_appointments(date, io.StringIO())
        assert [a.customer_name for a in listed] == ["First", "Second", "Third"]

    def test_listing_consumes(self, matrix):
        """A second listing of the same date prints no appointments."""
        date = ServiceDate(2023, 11, 14)
        matrix.add(date, Appointment(1, "John Doe", "Repair"))
        matrix.list_appointments(date, io.StringIO())

        out = io.StringIO()
        assert matrix.list_appointments(date, out) == []
        assert out.getvalue() == "Appointments 14.11.2023:\n"

    def test_without_consume_keeps_queue(self, matrix):
        date = ServiceDate(2023, 11, 14)
        matrix.add(date, Appointment(1, "John Doe", "Repair"))
        matrix.list_appointments(date, io.StringIO(), consume=False)

        out = io.StringIO()
        assert [a.customer_name for a in matrix.list_appointments(date, out)] == ["John Doe"]
        assert out.getvalue() == "Appointments 14.11.2023:\n1. John Doe\n"

    def test_other_dates_untouched(self, matrix):
        matrix.add(ServiceDate(2023, 11, 14), Appointment(1, "John", "Repair"))
        matrix.add(ServiceDate(2023, 11, 15), Appointment(2, "Jane", "Repair"))
        matrix.list_appointments(ServiceDate(2023, 11, 14), io.StringIO())
        assert len(matrix) == 1

    def test_defaults_to_stdout(self, matrix, capsys):
        date = ServiceDate(2023, 11, 14)
        matrix.add(date, Appointment(1, "John Doe", "Repair"))
        matrix.list_appointments(date)
        assert capsys.readouterr().out == "Appointments 14.11.2023:\n1. John Doe\n"


class TestPending:
    """Tests for the non-destructive views."""

    def test_pending_in_date_order(self, matrix):
        matrix.add(ServiceDate(2024, 1, 2), Appointment(3, "C", "Repair"))
        matrix.add(ServiceDate(2023, 5, 1), Appointment(1, "A", "Repair"))
        matrix.add(ServiceDate(2023, 5, 1), Appointment(2, "B", "Repair"))
        pending = [(str(d), a.customer_name) for d, a in matrix.pending()]
        assert pending == [("1/5/2023", "A"), ("1/5/2023", "B"), ("2/1/2024", "C")]
        assert len(matrix) == 3

    def test_monthly_counts(self, matrix):
        matrix.add(ServiceDate(2023, 5, 1), Appointment(1, "A", "Repair"))
        matrix.add(ServiceDate(2023, 5, 20), Appointment(2, "B", "Repair"))
        matrix.add(ServiceDate(2023, 6, 3), Appointment(3, "C", "Repair"))
        assert matrix.monthly_counts() == {(2023, 5): 2, (2023, 6): 1}

    def test_drain_all_empties_table(self, matrix):
        matrix.add(ServiceDate(2023, 6, 3), Appointment(3, "C", "Repair"))
        matrix.add(ServiceDate(2023, 5, 1), Appointment(1, "A", "Repair"))
        drained = [a.customer_name for _, a in matrix.drain_all()]
        assert drained == ["A", "C"]
        assert len(matrix) == 0
        assert list(matrix.pending()) == []


class TestAppointment:
    def test_is_maintenance_ignores_case(self):
        assert Appointment(1, "John", "maintenance").is_maintenance
        assert Appointment(1, "John", "Maintenance").is_maintenance
        assert not Appointment(1, "John", "Repair").is_maintenance
