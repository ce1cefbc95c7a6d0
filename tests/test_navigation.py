"""Unit tests for the navigation index builder and its YAML manifest."""

from __future__ import annotations

import typing as typ

import pytest
from ruamel.yaml import YAML

from training_pages.collection import ContentCollection
from training_pages.errors import BrokenLinkError, ContentError
from training_pages.models import DocumentLink, TopicDocument
from training_pages.navigation import build, entry_path

if typ.TYPE_CHECKING:
    from pathlib import Path


def _collection() -> ContentCollection:
    collection = ContentCollection(
        {
            "features": "Framework Features",
            "training-reference": "Training Reference",
            "capstone": "Capstone",
        },
        directories={"training-reference": "reference"},
    )
    collection.add(TopicDocument(title="Signals", slug="signals", category="features"))
    collection.add(
        TopicDocument(
            title="Class-based Views", slug="class-based-views", category="features"
        )
    )
    collection.add(
        TopicDocument(
            title="Contributing",
            slug="contributing",
            category="training-reference",
            path="reference/contributing.md",
        )
    )
    return collection


def _load(text: str) -> typ.Any:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(text)


def test_build_keeps_authoring_order_and_empty_categories() -> None:
    """Every category appears; entries follow insertion order."""
    index = build(_collection())
    assert list(index.categories) == ["features", "training-reference", "capstone"]
    assert index.pairs("features") == [
        ("Signals", "signals"),
        ("Class-based Views", "class-based-views"),
    ]
    assert index.pairs("capstone") == []
    assert index.entries("unknown") == []
    assert not index.is_empty()


def test_empty_collection_builds_empty_index() -> None:
    """A collection with no documents yields an index with no entries."""
    index = build(ContentCollection({"features": "Framework Features"}))
    assert index.is_empty()
    assert index.pairs("features") == []


def test_untitled_documents_fall_back_to_slug() -> None:
    """Navigation entries always carry a title."""
    collection = ContentCollection()
    collection.add(TopicDocument(title="", slug="draft", category="features"))
    assert build(collection).pairs("features") == [("draft", "draft")]


def test_broken_links_stop_the_build_and_are_all_listed() -> None:
    """The error lists every broken pair, not just the first."""
    collection = _collection()
    collection.add(
        TopicDocument(
            title="Messages",
            slug="messages",
            category="features",
            links=[
                DocumentLink("todo-completed-signal.md"),
                DocumentLink("forms.md"),
            ],
        )
    )
    with pytest.raises(BrokenLinkError) as excinfo:
        build(collection)
    assert excinfo.value.broken == [
        ("messages", "forms"),
        ("messages", "todo-completed-signal"),
    ]
    assert isinstance(excinfo.value, ContentError)
    assert "2 broken internal links:" in str(excinfo.value)
    assert "messages -> forms" in str(excinfo.value)


def test_entry_path_uses_file_path_or_category_directory() -> None:
    """Documents without a file get '<directory>/<slug>.md'."""
    collection = _collection()
    assert entry_path(collection, collection.get("signals")) == "features/signals.md"
    assert (
        entry_path(collection, collection.get("contributing"))
        == "reference/contributing.md"
    )
    root = ContentCollection({"home": "Home"}, directories={"home": "."})
    document = TopicDocument(title="Welcome", slug="welcome", category="home")
    root.add(document)
    assert entry_path(root, document) == "welcome.md"


def test_to_yaml_is_deterministic_and_omits_empty_categories() -> None:
    """Two builds of the same collection serialise identically."""
    first = build(_collection()).to_yaml()
    second = build(_collection()).to_yaml()
    assert first == second
    assert "Capstone" not in first, "empty categories are left out of the manifest"
    assert _load(first) == {
        "nav": [
            {
                "Framework Features": [
                    {"Signals": "features/signals.md"},
                    {"Class-based Views": "features/class-based-views.md"},
                ]
            },
            {"Training Reference": [{"Contributing": "reference/contributing.md"}]},
        ]
    }


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    """The manifest is written beneath missing directories."""
    index = build(_collection())
    target = tmp_path / "build" / "site" / "nav.yml"
    assert index.write(target) == target
    assert target.read_text(encoding="utf-8") == index.to_yaml()
