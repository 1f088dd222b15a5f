"""Test setup for guidetiles."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


RAID_GUIDE = """# DQ RAID Guidelines

Delivery is often seen as the final step of a project. In practice it depends on every risk, assumption, issue and dependency being visible early. This guide explains how teams keep that visibility.

## Overview

The RAID log is the single place where delivery risks are tracked.

## Roles

| Role | Responsibility |
|------|----------------|
| Scrum Master | Maintains the RAID log |
| Product Owner | Prioritises mitigation work |

## Cadence

Review the log weekly.

### Escalation

1. Raise the item in stand-up.
2. Escalate to the delivery lead within two days.

## Notes

Use the template | not a table here.
"""


@pytest.fixture
def raid_guide() -> str:
    """A guide body mixing prose, a table, lists and nested headings."""
    return RAID_GUIDE
