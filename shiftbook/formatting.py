"""Russian calendar labels and money formatting for views."""

from datetime import datetime

from .dates import end_of_week, start_of_week
from .models import Period

# Genitive forms, as used after a day number ("1 мая").
MONTHS_GENITIVE = (
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
)
MONTHS_GENITIVE_SHORT = (
    "янв.", "февр.", "мар.", "апр.", "мая", "июн.",
    "июл.", "авг.", "сент.", "окт.", "нояб.", "дек.",
)
MONTHS_NOMINATIVE = (
    "январь", "февраль", "март", "апрель", "май", "июнь",
    "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь",
)
MONTHS_NOMINATIVE_SHORT = (
    "янв.", "февр.", "март", "апр.", "май", "июнь",
    "июль", "авг.", "сент.", "окт.", "нояб.", "дек.",
)

PERIOD_TITLES = {
    Period.DAY: "Сводка за день",
    Period.WEEK: "Сводка за неделю",
    Period.MONTH: "Сводка за месяц",
}

CURRENCY = "₽"


def day_label(d: datetime) -> str:
    return str(d.day)


def week_label(week_start: datetime) -> str:
    return f"{week_start.day}-{end_of_week(week_start).day}"


def month_label(d: datetime) -> str:
    return MONTHS_NOMINATIVE_SHORT[d.month - 1]


def format_date(d: datetime) -> str:
    """dd.mm.yyyy, as in the shift list."""
    return d.strftime("%d.%m.%Y")


def period_header(period: Period, d: datetime) -> str:
    """Human readable name of the period containing ``d``.

    >>> period_header(Period.DAY, datetime(2024, 5, 1))
    '1 мая'
    """
    period = Period(period)
    if period is Period.DAY:
        return f"{d.day} {MONTHS_GENITIVE[d.month - 1]}"
    if period is Period.WEEK:
        start, end = start_of_week(d), end_of_week(d)
        return (
            f"{start.day} {MONTHS_GENITIVE_SHORT[start.month - 1]} - "
            f"{end.day} {MONTHS_GENITIVE_SHORT[end.month - 1]}"
        )
    return f"{MONTHS_NOMINATIVE[d.month - 1]} {d.year} г."


def format_money(amount: float) -> str:
    return f"{amount:.2f} {CURRENCY}"


def headline_caption(period: Period, shift_count: int) -> str:
    period = Period(period)
    if period is Period.WEEK:
        return "Чистыми за текущую неделю"
    if period is Period.MONTH:
        return "Чистыми за текущий месяц"
    return f"Сегодня • {shift_count} смен"
