"""Shared fixtures for paratext tests."""

import pytest


@pytest.fixture
def original_text() -> str:
    """Left-hand edition with one line the translation does not have."""
    return (
        "Alpha beta gamma.\n"
        "Inserted extra line here.\n"
        "Delta epsilon zeta.\n"
        "Eta theta iota."
    )


@pytest.fixture
def revised_text() -> str:
    """Right-hand edition missing the inserted line."""
    return (
        "Alpha beta gamma.\n"
        "Delta epsilon zeta.\n"
        "Eta theta iota."
    )


@pytest.fixture
def text_files(tmp_path, original_text, revised_text):
    """Write both editions to disk and return their paths."""
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text(original_text, encoding="utf-8")
    right.write_text(revised_text, encoding="utf-8")
    return left, right
