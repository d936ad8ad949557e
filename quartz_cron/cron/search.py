# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Find the earliest instant after a starting point that satisfies a `ConstraintSet`.

The search steps forward one second at a time. Once it has run for a while without a
match it also tries coarse jumps: to the next year when the year is not admitted, to the
next month when the month is not admitted, and to the next day when the day of the month
is not admitted. This is a bound on pathological scans rather than a field-by-field
carry algorithm, so unconstrained-looking fields (e.g. day-of-week) are still stepped
through second by second.
"""
from datetime import datetime, timedelta
from typing import Final, Optional

from dateutil.relativedelta import relativedelta

from quartz_cron.cron.expression import ConstraintSet, CronField
from quartz_cron.cron.matcher import matches
from quartz_cron.observability.powertools_logging import powertools_logger
from quartz_cron.util.app_env import SearchSettings

logger: Final = powertools_logger()

ONE_SECOND: Final = timedelta(seconds=1)


def find_next(
    start: datetime,
    constraints: ConstraintSet,
    settings: SearchSettings = SearchSettings(),
) -> Optional[datetime]:
    """
    Earliest instant strictly after `start` (at whole-second precision) that satisfies
    `constraints`, or None if there is none within `settings.max_tries` steps or before
    the end of the range `datetime` can represent.
    """
    try:
        return _scan(start, constraints, settings)
    except (OverflowError, ValueError) as err:
        # stepping or jumping past datetime.max (year 9999)
        logger.debug(
            "Search from {} ran out of representable dates: {}".format(
                start.isoformat(), err
            )
        )
        return None


def _scan(
    start: datetime, constraints: ConstraintSet, settings: SearchSettings
) -> Optional[datetime]:
    current = start.replace(microsecond=0) + ONE_SECOND
    tries = 0
    skipping = False

    while tries < settings.max_tries:
        if matches(current, constraints):
            return current

        current += ONE_SECOND
        tries += 1

        if tries <= settings.skip_ahead_after:
            continue

        if not skipping:
            skipping = True
            logger.debug(
                "No match after {} steps, enabling skip-ahead at {}".format(
                    tries, current.isoformat()
                )
            )

        # at most one jump per iteration, coarsest field first
        if not constraints.admits(CronField.YEARS, current.year):
            if current.year + 1 > max(constraints.years):
                logger.debug(
                    "Year {} is past the last admitted year {}".format(
                        current.year + 1, max(constraints.years)
                    )
                )
                return None
            current = _start_of_next_year(current)
            continue

        if not constraints.admits(CronField.MONTHS, current.month):
            current = _start_of_next_month(current)
            continue

        if not constraints.admits(CronField.DAYS_OF_MONTH, current.day):
            current = _start_of_next_day(current)
            continue

    logger.debug(
        "Search from {} gave up after {} steps".format(start.isoformat(), tries)
    )
    return None


def _start_of_next_year(dt: datetime) -> datetime:
    return dt + relativedelta(
        years=1, month=1, day=1, hour=0, minute=0, second=0, microsecond=0
    )


def _start_of_next_month(dt: datetime) -> datetime:
    return dt + relativedelta(
        months=1, day=1, hour=0, minute=0, second=0, microsecond=0
    )


def _start_of_next_day(dt: datetime) -> datetime:
    return dt + relativedelta(days=1, hour=0, minute=0, second=0, microsecond=0)
