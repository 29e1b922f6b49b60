from __future__ import annotations

import allure
import pytest

from forge_cli.commands.validation import ValidationOutcome, validate_name

pytestmark = [
    allure.epic("Commands"),
    allure.feature("Name Validation"),
]

SUGGESTION = (
    "Trying to generate an application structure in this directory? Use `forge init` instead."
)


@pytest.mark.parametrize(
    "name",
    ["test", "TEST", "forge", "Forge", "forge-cli", "Forge-CLI", "vendor", "Vendor"],
)
def test_reserved_names_are_rejected_with_literal_casing(name: str) -> None:
    outcome = validate_name(name)

    assert not outcome.valid
    assert outcome.reason == f"We currently do not support a name of `{name}`."


@pytest.mark.parametrize("name", ["zomg.awesome", "my.app", "trailing.", ".hidden"])
def test_names_with_a_period_are_rejected(name: str) -> None:
    outcome = validate_name(name)

    assert not outcome.valid
    assert outcome.reason == f"We currently do not support a name of `{name}`."


@pytest.mark.parametrize("name", ["123-my-bagel", "0app", "9"])
def test_names_starting_with_a_digit_are_rejected(name: str) -> None:
    outcome = validate_name(name)

    assert outcome.reason == f"We currently do not support a name of `{name}`."


def test_single_period_gets_the_init_suggestion() -> None:
    outcome = validate_name(".")

    assert not outcome.valid
    assert outcome.reason == SUGGESTION


@pytest.mark.parametrize("name", ["my-app", "app2", "a", "tests", "vendored", "forge-app", "_x"])
def test_other_names_are_valid(name: str) -> None:
    assert validate_name(name) == ValidationOutcome.ok()


def test_missing_name_mentions_the_command() -> None:
    outcome = validate_name("", command_name="new")

    assert outcome.reason == (
        "The `forge new` command requires a name to be specified. "
        "For more details, use `forge help`."
    )


def test_outcome_is_never_both_valid_and_invalid() -> None:
    with pytest.raises(ValueError, match="cannot carry a reason"):
        ValidationOutcome(valid=True, reason="nope")
    with pytest.raises(ValueError, match="requires a reason"):
        ValidationOutcome(valid=False)
