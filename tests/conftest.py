"""Shared fixtures for glance tests."""

import pytest

import glance

SAMPLE_TEXT = (
    "Speed reading trains the eye to take in more words per fixation. "
    'Readers who subvocalize (say each word silently) tend to read slower. '
    "Chunking text into short phrases helps [1]. Does it help comprehension? "
    "Studies disagree"
)


@pytest.fixture
def engine():
    """A fresh engine with an empty cache for every test."""
    return glance.create_engine()


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT
