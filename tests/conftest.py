"""
PyTest configuration and shared fixtures for the hash ring tests.

This file provides common test utilities and fixtures that can be used
across all test modules.
"""

import pytest
import sys
import os
from typing import Dict, List

# Add src directory to Python path for all tests
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

# Import after path setup
from consistent_hash import HashRing
from vnode import VNode


@pytest.fixture
def vnodes() -> List[VNode]:
    """The six reference virtual nodes, V1..V6, in insertion order."""
    return [
        VNode("127.0.0.1", 1024, 1),
        VNode("127.0.0.1", 1024, 2),
        VNode("127.0.0.2", 1024, 1),
        VNode("127.0.0.2", 1024, 2),
        VNode("127.0.0.2", 1024, 3),
        VNode("127.0.0.3", 1024, 1),
    ]


@pytest.fixture
def populated_ring(vnodes) -> HashRing:
    """Ring holding V1..V6, added in order."""
    ring = HashRing()
    for node in vnodes:
        ring.add(node)
    return ring


@pytest.fixture
def hash_ring() -> HashRing:
    """Create a hash ring with test nodes."""
    return HashRing(["node1", "node2", "node3"])


@pytest.fixture
def test_keys() -> List[str]:
    """Generate keys for distribution checks."""
    return [f"test_key_{i:06d}" for i in range(2000)]


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow running tests"
    )


class RingTestUtils:
    """Utility functions for tests."""

    @staticmethod
    def assignments(ring: HashRing, keys: List[str]) -> Dict[str, object]:
        """Map each key to the node the ring currently gives it."""
        return {key: ring.get(key) for key in keys}

    @staticmethod
    def moved_keys(before: Dict[str, object], after: Dict[str, object]) -> List[str]:
        """Keys whose node changed between two snapshots."""
        return [key for key in before if before[key] != after[key]]

    @staticmethod
    def assert_sorted(ring: HashRing):
        """Assert that ring entries are in non-decreasing hash order."""
        hashes = [entry.hash for entry in ring.entries()]
        assert hashes == sorted(hashes)


@pytest.fixture
def ring_utils() -> RingTestUtils:
    """Provide test utilities."""
    return RingTestUtils()
