import pytest

from cdeploy.utils import format_duration


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0.25, "250 ms"),
        (12.5, "12.50 sec"),
        (90, "1.50 min"),
        (5400, "1.50 hrs"),
    ],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected
