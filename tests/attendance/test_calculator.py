from datetime import datetime

from src.kintai_system.kintai_system.attendance.calculator import StandardWorkTimeCalculator


def test_standard_calculator_subtracts_break():
    calc = StandardWorkTimeCalculator()
    assert calc.worked_minutes(datetime(2024, 1, 15, 9, 0), datetime(2024, 1, 15, 18, 0), 60) == 8 * 60
    assert calc.total_hours(datetime(2024, 1, 15, 9, 0), datetime(2024, 1, 15, 18, 0), 60) == 8.0


def test_standard_calculator_floors_partial_minutes():
    calc = StandardWorkTimeCalculator()
    # 8h35m59s -> 515 whole minutes, minus 60 break
    minutes = calc.worked_minutes(datetime(2024, 1, 15, 9, 15, 0), datetime(2024, 1, 15, 17, 50, 59), 60)
    assert minutes == 455
    assert calc.total_hours(datetime(2024, 1, 15, 9, 15, 0), datetime(2024, 1, 15, 17, 50, 59), 60) == 7.58


def test_standard_calculator_never_negative():
    calc = StandardWorkTimeCalculator()
    assert calc.worked_minutes(datetime(2024, 1, 15, 9, 0), datetime(2024, 1, 15, 9, 30), 60) == 0


def test_standard_calculator_missing_time_is_zero():
    calc = StandardWorkTimeCalculator()
    assert calc.total_hours(datetime(2024, 1, 15, 9, 0), None, 60) == 0.0
    assert calc.total_hours(None, datetime(2024, 1, 15, 18, 0), 0) == 0.0
