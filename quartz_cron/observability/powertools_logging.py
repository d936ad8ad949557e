# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging

from aws_lambda_powertools import Logger

SERVICE_NAME = "quartz-cron"


def should_log_debug(logger: Logger) -> bool:
    return logger.log_level <= logging.DEBUG


def powertools_logger(service: str = SERVICE_NAME) -> Logger:
    return Logger(
        use_rfc3339=True,
        log_uncaught_exceptions=True,
        service=service,
    )
