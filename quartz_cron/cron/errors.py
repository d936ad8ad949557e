# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not-found"


class CronError(Exception):
    kind: ErrorKind


class ValidationError(CronError):
    """The expression (or one of its fields) is malformed"""

    kind = ErrorKind.VALIDATION


class NotFoundError(CronError):
    """No instant satisfying the expression exists within the search bound"""

    kind = ErrorKind.NOT_FOUND
