"""Pytest fixtures for tracmark tests."""

import json

import pytest
from pathlib import Path

from tracmark.formatting.context import RenderContext


@pytest.fixture
def sample_tree() -> list:
    """Parser output for a short ticket comment."""
    return [
        {"type": "heading", "level": 2, "text": "Steps"},
        {"type": "para"},
        "Applying ",
        {"type": "attachment", "id": "fix.diff", "text": "fix.diff"},
        " fixes ",
        {"type": "ticket", "id": 1234, "text": "#1234"},
        ", thanks ",
        {"type": "mention", "text": "jane"},
        "!",
        {"type": "para"},
        {
            "type": "unordered-list",
            "children": [
                ["First ", {"type": "bold", "children": ["step"]}],
                ["See ", {"type": "commit", "id": 45678, "text": "r45678"}],
            ],
        },
    ]


@pytest.fixture
def sample_document(sample_tree: list) -> dict:
    """Parser output wrapped with the ticket it was posted on."""
    return {"ticket": 42, "nodes": sample_tree}


@pytest.fixture
def ticket_context() -> RenderContext:
    """Context for text posted on ticket #42."""
    return RenderContext(ticket=42)


@pytest.fixture
def tmp_tree_file(tmp_path: Path, sample_document: dict) -> Path:
    """Write the sample document to a temporary JSON file."""
    file_path = tmp_path / "comment.json"
    file_path.write_text(json.dumps(sample_document), encoding="utf-8")
    return file_path
