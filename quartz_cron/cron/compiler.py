# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Compile a seven-field schedule expression and walk forward through its occurrences.

    expr = parse_expression("0 0 12 * * ? *", reference=datetime(2024, 1, 1))
    expr.next().value()  # 2024-01-01 12:00:00
    expr.next().value()  # 2024-01-02 12:00:00

A `CompiledExpression` owns its cursor. Calling `next` from several threads on the same
instance needs external locking; separately compiled expressions share nothing.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Final, Optional

from quartz_cron.cron.errors import NotFoundError, ValidationError
from quartz_cron.cron.expression import (
    FIELD_ORDER,
    UNCONSTRAINED,
    ConstraintSet,
    CronField,
    FieldDomain,
    field_domains,
)
from quartz_cron.cron.parser import ALL_VALUES, NO_SPECIFIC_VALUE, parse_field
from quartz_cron.cron.search import find_next
from quartz_cron.observability.powertools_logging import (
    powertools_logger,
    should_log_debug,
)
from quartz_cron.util.app_env import SearchSettings, get_search_settings

logger: Final = powertools_logger()

FIELD_COUNT: Final = len(FIELD_ORDER)
DAYS_OF_MONTH_POSITION: Final = FIELD_ORDER.index(CronField.DAYS_OF_MONTH)
DAYS_OF_WEEK_POSITION: Final = FIELD_ORDER.index(CronField.DAYS_OF_WEEK)


@dataclass(frozen=True)
class Occurrence:
    """An instant that satisfies a schedule expression"""

    instant: datetime

    def value(self) -> datetime:
        return self.instant


class CompiledExpression:
    def __init__(
        self,
        expression: str,
        constraints: ConstraintSet,
        current: datetime,
        settings: SearchSettings,
    ) -> None:
        self.expression = expression
        self.constraints = constraints
        self.settings = settings
        self._current = current

    @property
    def current(self) -> datetime:
        """The instant the next search starts after"""
        return self._current

    def next(self) -> Occurrence:
        """
        Find the first occurrence after the cursor and advance the cursor to it.

        :raises NotFoundError: if there is no occurrence within the search bound, the
            cursor is left unchanged
        """
        found: Final = find_next(self._current, self.constraints, self.settings)
        if found is None:
            logger.info(
                'No occurrence of "{}" found after {}'.format(
                    self.expression, self._current.isoformat()
                )
            )
            raise NotFoundError(
                f'Unable to find the next occurrence of "{self.expression}" after {self._current.isoformat()}'
            )

        self._current = found
        return Occurrence(instant=found)

    def __repr__(self) -> str:
        return f"CompiledExpression({self.expression!r}, current={self._current.isoformat()})"


def parse_expression(
    expression: str,
    *,
    reference: Optional[datetime] = None,
    settings: Optional[SearchSettings] = None,
) -> CompiledExpression:
    """
    Compile `expression` ("<second> <minute> <hour> <day_of_month> <month>
    <day_of_week> <year>").

    :param expression: the schedule expression
    :param reference: the instant the first search starts after, defaults to now
    :param settings: search settings, defaults to the settings read from the environment
    :raises ValidationError: if the expression or any of its fields is malformed
    """
    search_settings: Final = settings or get_search_settings()
    constraints: Final = compile_constraints(expression, search_settings.year_span)

    current: Final = (reference or datetime.now()).replace(microsecond=0)

    if should_log_debug(logger):
        logger.debug(
            'Compiled "{}" to {} starting after {}'.format(
                expression, constraints, current.isoformat()
            )
        )

    return CompiledExpression(
        expression=expression,
        constraints=constraints,
        current=current,
        settings=search_settings,
    )


def compile_constraints(expression: str, year_span: int) -> ConstraintSet:
    tokens: Final = expression.split()
    if len(tokens) != FIELD_COUNT:
        raise ValidationError(
            f"Expression must have {FIELD_COUNT} fields "
            f"(second minute hour day_of_month month day_of_week year), "
            f"got {len(tokens)}: {expression!r}"
        )

    constraints = ConstraintSet(
        **{
            domain.field.value: _parse_token(token, domain)
            for token, domain in zip(tokens, field_domains(year_span))
        }
    )

    # "?" in day-of-month means only day-of-week is checked, otherwise "?" in
    # day-of-week means only day-of-month is checked
    if tokens[DAYS_OF_MONTH_POSITION] == NO_SPECIFIC_VALUE:
        constraints = replace(constraints, days_of_month=UNCONSTRAINED)
    elif tokens[DAYS_OF_WEEK_POSITION] == NO_SPECIFIC_VALUE:
        constraints = replace(constraints, days_of_week=UNCONSTRAINED)

    return constraints


def _parse_token(token: str, domain: FieldDomain) -> frozenset[int]:
    # a year wildcard is left unconstrained instead of being expanded
    if domain.field == CronField.YEARS and token == ALL_VALUES:
        return UNCONSTRAINED
    return parse_field(token, domain)
