"""Metrics status names and the failure categories tied to exit codes."""

from __future__ import annotations

from dataclasses import dataclass

API_SOURCE = "api"
SUCCESS_STATUS = "success"
FAILURE_STATUS = "failure"
COMPOSE_PARSE_FAILURE_STATUS = "failure-compose-parse"
FILE_NOT_FOUND_FAILURE_STATUS = "failure-file-not-found"
COMMAND_SYNTAX_FAILURE_STATUS = "failure-cmd-syntax"
BUILD_FAILURE_STATUS = "failure-build"
PULL_FAILURE_STATUS = "failure-pull"
CANCELED_STATUS = "canceled"

_CANCELED_EXIT_CODE = 130


@dataclass(frozen=True)
class FailureCategory:
    """A metrics status together with the exit code that reports it."""

    metrics_status: str
    exit_code: int


FILE_NOT_FOUND_FAILURE = FailureCategory(FILE_NOT_FOUND_FAILURE_STATUS, 14)
COMPOSE_PARSE_FAILURE = FailureCategory(COMPOSE_PARSE_FAILURE_STATUS, 15)
COMMAND_SYNTAX_FAILURE = FailureCategory(COMMAND_SYNTAX_FAILURE_STATUS, 16)
BUILD_FAILURE = FailureCategory(BUILD_FAILURE_STATUS, 17)
PULL_FAILURE = FailureCategory(PULL_FAILURE_STATUS, 18)

_KNOWN_FAILURES = {
    category.exit_code: category
    for category in (
        FILE_NOT_FOUND_FAILURE,
        COMPOSE_PARSE_FAILURE,
        COMMAND_SYNTAX_FAILURE,
        BUILD_FAILURE,
        PULL_FAILURE,
    )
}


def by_exit_code(exit_code: int) -> FailureCategory:
    """Return the category that a command's exit code falls in."""
    if exit_code == 0:
        return FailureCategory(SUCCESS_STATUS, 0)
    if exit_code in _KNOWN_FAILURES:
        return _KNOWN_FAILURES[exit_code]
    if exit_code == _CANCELED_EXIT_CODE:
        return FailureCategory(CANCELED_STATUS, exit_code)
    return FailureCategory(FAILURE_STATUS, exit_code)