# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
The compiled form of a seven-field schedule expression.

A schedule expression takes the form of:

    <second> <minute> <hour> <day_of_month> <month> <day_of_week> <year>

Each field is compiled to the set of integer values it admits. An empty set is not "no
values", it is the marker for an unconstrained field: a field set to "?" (only legal for
day-of-month and day-of-week), or a year field set to "*".

Day-of-week values run from 1 (Sunday) to 7 (Saturday).
"""
from dataclasses import dataclass
from datetime import MAXYEAR, datetime
from enum import Enum
from typing import Final


class CronField(str, Enum):
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS_OF_MONTH = "days_of_month"
    MONTHS = "months"
    DAYS_OF_WEEK = "days_of_week"
    YEARS = "years"


# fields in the order they appear in an expression
FIELD_ORDER: Final = (
    CronField.SECONDS,
    CronField.MINUTES,
    CronField.HOURS,
    CronField.DAYS_OF_MONTH,
    CronField.MONTHS,
    CronField.DAYS_OF_WEEK,
    CronField.YEARS,
)

# fields that accept "?"
DAY_FIELDS: Final = frozenset({CronField.DAYS_OF_MONTH, CronField.DAYS_OF_WEEK})


@dataclass(frozen=True)
class FieldDomain:
    """Inclusive bounds of the values a field can take"""

    field: CronField
    min_value: int
    max_value: int

    def all_values(self) -> list[int]:
        return list(range(self.min_value, self.max_value + 1))

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.min_value <= value <= self.max_value


SECONDS_DOMAIN: Final = FieldDomain(CronField.SECONDS, 0, 59)
MINUTES_DOMAIN: Final = FieldDomain(CronField.MINUTES, 0, 59)
HOURS_DOMAIN: Final = FieldDomain(CronField.HOURS, 0, 23)
DAYS_OF_MONTH_DOMAIN: Final = FieldDomain(CronField.DAYS_OF_MONTH, 1, 31)
MONTHS_DOMAIN: Final = FieldDomain(CronField.MONTHS, 1, 12)
DAYS_OF_WEEK_DOMAIN: Final = FieldDomain(CronField.DAYS_OF_WEEK, 1, 7)


def years_domain(year_span: int, now: datetime | None = None) -> FieldDomain:
    """
    Years from the current year up to and including `year_span` years later, capped at
    the last year `datetime` can represent
    """
    current_year = (now or datetime.now()).year
    return FieldDomain(
        CronField.YEARS, current_year, min(current_year + year_span, MAXYEAR)
    )


def field_domains(year_span: int) -> tuple[FieldDomain, ...]:
    """Domains of all seven fields, in expression order"""
    return (
        SECONDS_DOMAIN,
        MINUTES_DOMAIN,
        HOURS_DOMAIN,
        DAYS_OF_MONTH_DOMAIN,
        MONTHS_DOMAIN,
        DAYS_OF_WEEK_DOMAIN,
        years_domain(year_span),
    )


UNCONSTRAINED: Final[frozenset[int]] = frozenset()


@dataclass(frozen=True)
class ConstraintSet:
    """The admissible values of every field. An empty set admits any value."""

    seconds: frozenset[int] = UNCONSTRAINED
    minutes: frozenset[int] = UNCONSTRAINED
    hours: frozenset[int] = UNCONSTRAINED
    days_of_month: frozenset[int] = UNCONSTRAINED
    months: frozenset[int] = UNCONSTRAINED
    days_of_week: frozenset[int] = UNCONSTRAINED
    years: frozenset[int] = UNCONSTRAINED

    def __getitem__(self, cron_field: CronField) -> frozenset[int]:
        values: frozenset[int] = getattr(self, cron_field.value)
        return values

    def admits(self, cron_field: CronField, value: int) -> bool:
        values = self[cron_field]
        return not values or value in values
