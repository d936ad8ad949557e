# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from os import environ
from typing import Final, Optional

from quartz_cron.util.app_env_utils import env_to_positive_int

# five years worth of seconds
DEFAULT_MAX_TRIES: Final = 5 * 365 * 24 * 60 * 60
DEFAULT_SKIP_AHEAD_AFTER: Final = 10_000
DEFAULT_YEAR_SPAN: Final = 100


@dataclass(frozen=True)
class SearchSettings:
    # upper bound on one-second steps before a search gives up
    max_tries: int = DEFAULT_MAX_TRIES
    # number of non-matching steps before coarse year/month/day jumps are attempted
    skip_ahead_after: int = DEFAULT_SKIP_AHEAD_AFTER
    # years after the current year covered by wildcards in the year field
    year_span: int = DEFAULT_YEAR_SPAN

    @staticmethod
    def from_env() -> "SearchSettings":
        return SearchSettings(
            max_tries=env_to_positive_int(
                "CRON_SEARCH_MAX_TRIES",
                environ.get("CRON_SEARCH_MAX_TRIES", str(DEFAULT_MAX_TRIES)),
            ),
            skip_ahead_after=env_to_positive_int(
                "CRON_SKIP_AHEAD_AFTER",
                environ.get("CRON_SKIP_AHEAD_AFTER", str(DEFAULT_SKIP_AHEAD_AFTER)),
            ),
            year_span=env_to_positive_int(
                "CRON_YEAR_SPAN",
                environ.get("CRON_YEAR_SPAN", str(DEFAULT_YEAR_SPAN)),
            ),
        )


# cache the settings, the environment is only read once
_search_settings: Optional[SearchSettings] = None


def get_search_settings() -> SearchSettings:
    """
    Retrieve the search settings from the environment. The environment is only read the
    first time this is called. Callers that need different settings per expression
    should construct a `SearchSettings` directly and pass it to `parse_expression`.
    """
    global _search_settings
    if not _search_settings:
        _search_settings = SearchSettings.from_env()
    return _search_settings


def reset_search_settings_cache() -> None:
    global _search_settings
    _search_settings = None
