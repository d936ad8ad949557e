# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime
from os import environ
from unittest.mock import patch

import pytest
from freezegun import freeze_time
from pytest import raises

from quartz_cron import parse_expression
from quartz_cron.util.app_env import (
    DEFAULT_MAX_TRIES,
    DEFAULT_SKIP_AHEAD_AFTER,
    DEFAULT_YEAR_SPAN,
    SearchSettings,
    get_search_settings,
    reset_search_settings_cache,
)
from quartz_cron.util.app_env_utils import AppEnvError


def test_defaults_when_environment_is_empty() -> None:
    settings = SearchSettings.from_env()
    assert settings == SearchSettings()
    assert settings.max_tries == DEFAULT_MAX_TRIES == 157_680_000
    assert settings.skip_ahead_after == DEFAULT_SKIP_AHEAD_AFTER == 10_000
    assert settings.year_span == DEFAULT_YEAR_SPAN == 100


def test_reads_settings_from_environment() -> None:
    env = {
        "CRON_SEARCH_MAX_TRIES": "5000",
        "CRON_SKIP_AHEAD_AFTER": " 20 ",
        "CRON_YEAR_SPAN": "10",
    }
    with patch.dict(environ, env):
        assert SearchSettings.from_env() == SearchSettings(
            max_tries=5000, skip_ahead_after=20, year_span=10
        )


@pytest.mark.parametrize(
    "key,value",
    [
        ("CRON_SEARCH_MAX_TRIES", "lots"),
        ("CRON_SEARCH_MAX_TRIES", "0"),
        ("CRON_SKIP_AHEAD_AFTER", "-5"),
        ("CRON_YEAR_SPAN", "1.5"),
    ],
)
def test_invalid_values_raise(key: str, value: str) -> None:
    with patch.dict(environ, {key: value}):
        with raises(AppEnvError) as err:
            SearchSettings.from_env()
    assert key in str(err.value)


def test_settings_are_cached_until_reset() -> None:
    first = get_search_settings()
    with patch.dict(environ, {"CRON_YEAR_SPAN": "5"}):
        assert get_search_settings() is first
        reset_search_settings_cache()
        assert get_search_settings().year_span == 5


@freeze_time(datetime(2024, 1, 1))
def test_parse_expression_uses_environment_settings() -> None:
    with patch.dict(environ, {"CRON_YEAR_SPAN": "10"}):
        expr = parse_expression("0 0 0 1 1 ? */5")
    assert expr.settings.year_span == 10
    assert expr.constraints.years == {2024, 2029, 2034}


def test_explicit_settings_take_precedence() -> None:
    with patch.dict(environ, {"CRON_SEARCH_MAX_TRIES": "10"}):
        expr = parse_expression(
            "0 0 12 * * ? *",
            reference=datetime(2024, 1, 1),
            settings=SearchSettings(),
        )
    assert expr.next().value() == datetime(2024, 1, 1, 12, 0, 0)
