"""Pytest configuration and shared fixtures for md2dita test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest

# Configure Hypothesis for property-based testing
from hypothesis import Phase, Verbosity, settings

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
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a sample Markdown document with front matter.

    Returns
    -------
    str
        Markdown text exercising headings, lists, code, tables and links.

    """
    return """---
author: Jane Doe
keyword: [install, setup]
audience: administrator
product: widget
---
# Installing Widget

Read the **requirements** first. See [the guide](guide.md).

## Requirements

- Python 3.10
- A _fast_ disk

```bash
pip install widget
```

## Configuration

| Key | Value |
|-----|-------|
| port | 8080 |

> Restart after changes.
"""


@pytest.fixture
def front_matter_header() -> dict:
    """Provide a front-matter mapping with known and unknown keys.

    Returns
    -------
    dict
        Keys mapped to ordered value lists.

    """
    return {
        "zeta": ["last"],
        "keyword": ["dita", "markdown"],
        "author": ["Jane Doe", "John Roe"],
        "alpha": ["first"],
        "permissions": ["internal"],
        "resourceid": ["intro-topic"],
        "category": ["guides"],
    }
