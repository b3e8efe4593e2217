from __future__ import annotations

import calendar

from taskcal.buckets import DateBucketKey, end_of_week, start_of_week, to_bucket_key
from taskcal.models import View, WeekStart


def period_label(view, anchor, week_starts_on="mon") -> str:
    anchor = to_bucket_key(anchor)
    if View(view) is View.MONTH:
        return f"{calendar.month_name[anchor.month]} {anchor.year}"
    first = start_of_week(anchor, week_starts_on).to_date()
    last = end_of_week(anchor, week_starts_on).to_date()
    if first.year != last.year:
        return f"{first.strftime('%b %d, %Y')} - {last.strftime('%b %d, %Y')}"
    return f"{first.strftime('%b %d')} - {last.strftime('%b %d, %Y')}"


def weekday_headers(week_starts_on="mon", short: bool = True) -> list[str]:
    names = calendar.day_abbr if short else calendar.day_name
    first = WeekStart(week_starts_on).first_weekday
    return [names[(first + offset) % 7] for offset in range(7)]


def day_heading(key: DateBucketKey) -> str:
    return f"Tasks for {to_bucket_key(key).to_date().strftime('%a %b %d %Y')}"


def short_day_label(key: DateBucketKey) -> str:
    return to_bucket_key(key).to_date().strftime("%a %d/%m")
