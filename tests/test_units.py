import numpy as np
import pytest

from radar.exceptions import ValidationError
from radar.units import Angle, AngleUnit, Power, Scale, as_power


def test_power_db_to_linear():
    p = Power(30.0, Scale.DB)
    assert p.linear == pytest.approx(1000.0)
    assert p.to_linear().scale is Scale.LINEAR
    assert p.db == 30.0


def test_power_array_round_trip():
    values = np.array([0.5, 1.0, 20.0])
    p = Power(values, "linear")
    np.testing.assert_allclose(p.to_db().to_linear().value, values)


def test_power_conversion_returns_new_object():
    p = Power(10.0, Scale.DB)
    q = p.to_linear()
    assert p.scale is Scale.DB
    assert p.value == 10.0
    assert q.value == pytest.approx(10.0)


def test_angle_conversions():
    a = Angle(180.0, "degrees")
    assert a.radians == pytest.approx(np.pi)
    assert a.to_radians().unit is AngleUnit.RADIANS
    assert Angle(np.pi / 2).degrees == pytest.approx(90.0)


def test_scale_parse_accepts_prefixes():
    assert Scale.parse("Linear") is Scale.LINEAR
    assert Scale.parse("db") is Scale.DB
    with pytest.raises(ValidationError):
        Scale.parse("volts")


def test_angle_unit_parse_rejects_unknown_tags():
    assert AngleUnit.parse("deg") is AngleUnit.DEGREES
    assert AngleUnit.parse("Radians") is AngleUnit.RADIANS
    with pytest.raises(ValidationError):
        AngleUnit.parse("gradians")
    with pytest.raises(ValidationError):
        Angle(1.0, "turns")


def test_as_power_passes_power_through():
    p = Power(3.0, Scale.DB)
    assert as_power(p) is p
    assert as_power(2.0).scale is Scale.LINEAR
