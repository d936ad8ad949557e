# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Determine if a `datetime` satisfies a compiled schedule expression"""
from datetime import datetime

from quartz_cron.cron.expression import ConstraintSet


def quartz_weekday(dt: datetime) -> int:
    """Day of the week of `dt`, from 1 (Sunday) to 7 (Saturday)"""
    # isoweekday runs from 1 (Monday) to 7 (Sunday)
    return dt.isoweekday() % 7 + 1


def matches(dt: datetime, constraints: ConstraintSet) -> bool:
    """Does `dt` satisfy every constrained field of `constraints`"""
    # Standard Quartz behavior requires one of day-of-month and day-of-week to be "?".
    # That is not enforced here: when both are constrained, a date must satisfy both
    # fields, so only days in the intersection match. This narrows matches compared to
    # the OR semantics of conventional cron.
    if constraints.seconds and dt.second not in constraints.seconds:
        return False
    if constraints.minutes and dt.minute not in constraints.minutes:
        return False
    if constraints.hours and dt.hour not in constraints.hours:
        return False
    if constraints.days_of_month and dt.day not in constraints.days_of_month:
        return False
    if constraints.days_of_week and quartz_weekday(dt) not in constraints.days_of_week:
        return False
    if constraints.months and dt.month not in constraints.months:
        return False
    if constraints.years and dt.year not in constraints.years:
        return False
    return True
