import pytest

from school_attendance.reports.calculator import attendance_percentage


@pytest.mark.parametrize(
    "present,total,expected",
    [
        (2, 3, 66.67),
        (1, 3, 33.33),
        (1, 8, 12.5),
        (1, 800, 0.13),
        (3, 4, 75.0),
        (5, 5, 100.0),
        (0, 5, 0.0),
    ],
)
def test_percentage_rounds_half_up_to_two_places(present, total, expected):
    assert attendance_percentage(present, total) == expected


def test_no_classes_is_zero_not_an_error():
    result = attendance_percentage(0, 0)

    assert result == 0.0
    assert isinstance(result, float)
