"""
Pytest configuration and shared fixtures for shcontroller tests.
"""

import pytest

from shcontroller.core import flex, seq_val


# ─── Dimension chains ────────────────────────────────────────────────────


@pytest.fixture
def flex_chain():
    """10 fixed, two equal flex entries, 20 fixed, in a total of 50."""
    return seq_val(
        [("a", 10), ("b", flex()), ("c", flex()), ("d", 20)],
        total=50,
    )


@pytest.fixture
def fixed_chain():
    """All-fixed chain without a total."""
    return seq_val([("a", 1), ("b", 2), ("c", 3)])


# ─── Device skeleton ─────────────────────────────────────────────────────


@pytest.fixture(scope="module")
def controller():
    """Module-scoped controller skeleton with default parameters."""
    from shcontroller.device import ControllerSkeleton
    return ControllerSkeleton()


@pytest.fixture(scope="module")
def skeleton_root(controller):
    """Module-scoped resolved SkeletonNode tree."""
    return controller.node
