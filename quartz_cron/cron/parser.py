# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Parse a single field of a schedule expression to the set of values it admits.

Supported forms, checked in this order:

- "?" (day-of-month and day-of-week only): unconstrained
- "*": every value of the field's domain
- "base/step": every step-th element of the sequence produced by base
- "v1,v2,...": list, each member may itself be a value or a range
- "start-end": inclusive range
- a single base-10 integer
"""
import re
from datetime import MAXYEAR
from typing import Final

from quartz_cron.cron.errors import ValidationError
from quartz_cron.cron.expression import (
    DAY_FIELDS,
    UNCONSTRAINED,
    CronField,
    FieldDomain,
)

NO_SPECIFIC_VALUE: Final = "?"
ALL_VALUES: Final = "*"
STEP_CHARACTER: Final = "/"
LIST_CHARACTER: Final = ","
RANGE_CHARACTER: Final = "-"

_single_value_re: Final = re.compile(r"[0-9]+")


def parse_field(token: str, domain: FieldDomain) -> frozenset[int]:
    if token == NO_SPECIFIC_VALUE:
        if domain.field not in DAY_FIELDS:
            raise ValidationError(
                f'"?" is only allowed for days_of_month and days_of_week, found in {domain.field.value}'
            )
        return UNCONSTRAINED

    values: Final = _parse_sequence(token, domain)

    # the year domain only drives wildcard expansion, a literal year in the past is
    # legal and simply never matches
    if domain.field != CronField.YEARS:
        for value in values:
            if value not in domain:
                raise ValidationError(
                    f"Value {value} in {domain.field.value} expression must be between "
                    f"{domain.min_value} and {domain.max_value}: {token}"
                )

    return frozenset(values)


def _parse_sequence(token: str, domain: FieldDomain) -> list[int]:
    # produces an ordered sequence, order matters to step expressions
    if token == ALL_VALUES:
        return domain.all_values()
    if STEP_CHARACTER in token:
        return _parse_step(token, domain)
    if LIST_CHARACTER in token:
        return _parse_list(token, domain)
    if RANGE_CHARACTER in token:
        return _parse_range(token, domain)
    return [_parse_number(token, domain)]


def _parse_step(token: str, domain: FieldDomain) -> list[int]:
    parts: Final = token.split(STEP_CHARACTER)
    if len(parts) != 2:
        raise ValidationError(
            f"Could not parse {domain.field.value} step expression: {token}"
        )

    base, step_str = parts
    step: Final = _parse_number(step_str, domain)
    if step <= 0:
        raise ValidationError(
            f"Step value in {domain.field.value} expression must be > 0: {token}"
        )

    return _every_nth_position(_parse_sequence(base, domain), step)


def _every_nth_position(sequence: list[int], step: int) -> list[int]:
    """
    Keep the elements at positions 0, step, 2*step, ... of `sequence`.

    This filters by position, not by value. The two agree when the base is a contiguous
    range starting at the domain minimum ("*/15" on seconds is 0,15,30,45), but they
    diverge otherwise: "5/15" is only {5}, and "1,3,5-7/2" is {1, 5, 7}.
    """
    return [value for position, value in enumerate(sequence) if position % step == 0]


def _parse_list(token: str, domain: FieldDomain) -> list[int]:
    result: list[int] = []
    for member in token.split(LIST_CHARACTER):
        result.extend(_parse_sequence(member.strip(), domain))
    return result


def _parse_range(token: str, domain: FieldDomain) -> list[int]:
    parts: Final = token.split(RANGE_CHARACTER)
    if len(parts) != 2:
        raise ValidationError(
            f"Could not parse {domain.field.value} range expression: {token}"
        )

    start: Final = _parse_number(parts[0], domain)
    end: Final = _parse_number(parts[1], domain)
    if start > end:
        raise ValidationError(
            f"Range wrapping is not supported for {domain.field.value} expressions. received: {token}"
        )

    return list(range(start, end + 1))


def _parse_number(text: str, domain: FieldDomain) -> int:
    stripped: Final = text.strip()
    if not _single_value_re.fullmatch(stripped):
        raise ValidationError(
            f"Could not parse as numeric value in {domain.field.value} expression: {text!r}"
        )
    value: Final = int(stripped)
    if domain.field == CronField.YEARS and value > MAXYEAR:
        raise ValidationError(
            f"Value in years expression must not be after {MAXYEAR}: {text!r}"
        )
    return value
