from training_engine.utils.units import km_to_meters, meters_to_km, round_half_up, seconds_to_minutes


def test_round_half_up_rounds_halves_towards_positive_infinity():
    assert round_half_up(2.5) == 3
    assert round_half_up(7.5) == 8
    assert round_half_up(-2.5) == -2
    assert round_half_up(4.4) == 4


def test_conversions():
    assert meters_to_km(16000) == 16.0
    assert km_to_meters(5) == 5000
    assert seconds_to_minutes(3600) == 60
