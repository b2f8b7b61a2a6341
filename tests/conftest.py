"""Pytest configuration and shared fixtures for the bbtree test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from bbtree.parsers.bbcode import BBCodeParser

# Hypothesis profiles; select with HYPOTHESIS_PROFILE=ci|dev|debug
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def parser() -> BBCodeParser:
    """Parser with the built-in catalog and default options."""
    return BBCodeParser()


@pytest.fixture
def sample_post() -> str:
    """A forum post exercising inline tags, a code block and a list."""
    return (
        "Hello [b]world[/b], see [url=http://example.com]the site[/url].\n"
        "[code]\n"
        "print('[b]not bold[/b]')\n"
        "[/code]\n"
        "[list=1]\n"
        "[*]first [i]item[/i]\n"
        "stray line\n"
        "[*]second\n"
        "[/list]\n"
        "Bye."
    )
