import pytest

from composeops.compose.metrics import (
    BUILD_FAILURE,
    CANCELED_STATUS,
    COMMAND_SYNTAX_FAILURE,
    COMPOSE_PARSE_FAILURE,
    FAILURE_STATUS,
    FILE_NOT_FOUND_FAILURE,
    PULL_FAILURE,
    SUCCESS_STATUS,
    FailureCategory,
    by_exit_code,
)


def test_success():
    assert by_exit_code(0) == FailureCategory(SUCCESS_STATUS, 0)


@pytest.mark.parametrize(
    "category",
    [FILE_NOT_FOUND_FAILURE, COMPOSE_PARSE_FAILURE, COMMAND_SYNTAX_FAILURE, BUILD_FAILURE, PULL_FAILURE],
)
def test_known_failures_round_trip(category):
    assert by_exit_code(category.exit_code) == category


def test_known_failure_codes_fixed_by_source():
    assert by_exit_code(14).metrics_status == "failure-file-not-found"
    assert by_exit_code(18).metrics_status == "failure-pull"


def test_canceled():
    result = by_exit_code(130)
    assert result.metrics_status == CANCELED_STATUS
    assert result.exit_code == 130


@pytest.mark.parametrize("code", [1, 2, 137, 255])
def test_other_codes_are_generic_failures(code):
    assert by_exit_code(code) == FailureCategory(FAILURE_STATUS, code)


def test_category_is_immutable():
    result = by_exit_code(18)
    with pytest.raises(AttributeError):
        result.exit_code = 1  # type: ignore[misc]
    assert result.exit_code == 18
    assert by_exit_code(18) == PULL_FAILURE