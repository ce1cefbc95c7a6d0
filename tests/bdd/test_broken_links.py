"""Behaviour tests for internal link validation.

The scenarios in ``features/broken_links.feature`` write a small training site
to a temporary directory, load it from disk, and check the broken links the
validator and the navigation builder report.

Usage
-----
Run ``pytest tests/bdd/test_broken_links.py -v``.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from training_pages.config import load_site_config
from training_pages.content_loader import load_collection
from training_pages.errors import BrokenLinkError
from training_pages.links import validate
from training_pages.navigation import build

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "broken_links.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a training site where signals links to a missing topic")
def given_missing_topic(
    make_site: cabc.Callable[..., Path],
    topic_text: cabc.Callable[..., str],
    scenario_state: ScenarioState,
) -> None:
    """Write a site whose signals topic references an unwritten page."""
    scenario_state["config_path"] = make_site(
        {
            "features/signals.md": topic_text(
                "Signals", links=["todo-completed-signal.md"]
            ),
            "features/class-based-views.md": topic_text("Class-based Views"),
        },
        documents=["signals", "class-based-views"],
    )


@given("a training site with links across categories")
def given_cross_category_links(
    make_site: cabc.Callable[..., Path],
    topic_text: cabc.Callable[..., str],
    scenario_state: ScenarioState,
) -> None:
    """Write a site where feature and reference topics link both ways."""
    scenario_state["config_path"] = make_site(
        {
            "features/signals.md": topic_text(
                "Signals", links=["../reference/project-setup.md#project-setup"]
            ),
            "reference/project-setup.md": topic_text(
                "Project Setup", sections=(), links=["../features/signals.md#basics"]
            ),
        }
    )


@when("I validate the collection")
def when_validate(scenario_state: ScenarioState) -> None:
    """Load the site from disk and collect its broken links."""
    collection = load_collection(load_site_config(scenario_state["config_path"]))
    scenario_state["collection"] = collection
    scenario_state["broken"] = validate(collection)


@then("the broken link from signals to todo-completed-signal is reported")
def then_missing_topic_reported(scenario_state: ScenarioState) -> None:
    """Verify the validator names the source and the missing slug."""
    broken = scenario_state["broken"]
    assert broken == {("signals", "todo-completed-signal")}, (
        f"expected one broken link from signals, got {broken!r}"
    )


@then("building the navigation fails with the same broken link")
def then_build_fails(scenario_state: ScenarioState) -> None:
    """Verify the navigation builder refuses the collection."""
    with pytest.raises(BrokenLinkError) as excinfo:
        build(scenario_state["collection"])
    assert excinfo.value.broken == [("signals", "todo-completed-signal")], (
        f"unexpected broken links in error: {excinfo.value.broken!r}"
    )


@then("no broken links are reported")
def then_no_broken_links(scenario_state: ScenarioState) -> None:
    """Verify every link in the collection resolves."""
    broken = scenario_state["broken"]
    assert broken == set(), f"expected no broken links, got {broken!r}"
