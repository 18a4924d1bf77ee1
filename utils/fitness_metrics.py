"""
Body metrics derived from a fitness profile.

All helpers return None when an input is missing so a partially filled
profile still renders.
"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


def _to_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError:
        return None


def calculate_age(date_of_birth: DateLike, today: Optional[date] = None) -> Optional[int]:
    """Whole years elapsed since date_of_birth"""
    born = _to_date(date_of_birth)
    if born is None:
        return None

    today = today or date.today()
    had_birthday = (today.month, today.day) >= (born.month, born.day)
    return today.year - born.year - (0 if had_birthday else 1)


def _height_in_meters(height: float) -> float:
    # Heights above 3 are centimetres
    return height / 100 if height > 3 else height


def calculate_bmi(weight: Optional[float], height: Optional[float]) -> Optional[float]:
    """Body mass index, kg/m², one decimal"""
    if not weight or not height:
        return None
    meters = _height_in_meters(float(height))
    return round(float(weight) / (meters * meters), 1)


def calculate_bmr(
    weight: Optional[float],
    height: Optional[float],
    age: Optional[int],
    gender: Optional[str],
) -> Optional[int]:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor)"""
    if not weight or not height or age is None or not gender:
        return None

    height_cm = _height_in_meters(float(height)) * 100
    base = 10 * float(weight) + 6.25 * height_cm - 5 * age
    offset = 5 if str(gender).lower() == "male" else -161
    return round(base + offset)
