import pytest

from recipe_parser.units import UNITS, METRIC_UNITS, VULGAR_FRACTIONS


def test_units_unique() -> None:
    assert len(set(UNITS)) == len(UNITS)


@pytest.mark.parametrize(
    "longer, shorter",
    [
        ("cups", "cup"),
        ("cloves", "clove"),
        ("tins", "tin"),
        ("cans", "can"),
        ("kg", "g"),
    ],
)
def test_longer_units_tried_first(longer: str, shorter: str) -> None:
    assert UNITS.index(longer) < UNITS.index(shorter)


def test_metric_units_are_units() -> None:
    assert set(METRIC_UNITS) <= set(UNITS)


def test_vulgar_fractions() -> None:
    assert VULGAR_FRACTIONS["½"] == 0.5
    assert VULGAR_FRACTIONS["¼"] == 0.25
    assert VULGAR_FRACTIONS["¾"] == 0.75
    assert VULGAR_FRACTIONS["⅓"] == pytest.approx(0.3333333)
    assert VULGAR_FRACTIONS["⅔"] == pytest.approx(0.6666667)
