# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from os import environ
from unittest.mock import patch

from pytest import fixture

from quartz_cron.util.app_env import reset_search_settings_cache


@fixture(autouse=True)
def search_settings_env() -> Iterator[None]:
    # every test starts with no search settings in the environment and nothing cached
    env = {key: value for key, value in environ.items() if not key.startswith("CRON_")}
    with patch.dict(environ, env, clear=True):
        reset_search_settings_cache()
        yield
        reset_search_settings_cache()
