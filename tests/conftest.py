"""Shared topology fixtures."""

import pytest

from netresilience.topology import TopologyBuilder, sample_graph


@pytest.fixture
def path_graph():
    """A - B - C."""
    return (
        TopologyBuilder()
        .add_node("A", x=0, y=0)
        .add_node("B", x=10, y=0)
        .add_node("C", x=20, y=0)
        .add_link("A", "B")
        .add_link("B", "C")
        .build()
    )


@pytest.fixture
def star_graph():
    """Hub H with leaves L1, L2, L3."""
    return (
        TopologyBuilder()
        .add_node("H", kind="hub")
        .add_node("L1", x=10, y=0)
        .add_node("L2", x=0, y=10)
        .add_node("L3", x=-10, y=0)
        .add_link("H", "L1")
        .add_link("H", "L2")
        .add_link("H", "L3")
        .build()
    )


@pytest.fixture
def cycle_graph():
    """A - B - C - D - A."""
    return (
        TopologyBuilder()
        .add_node("A", x=0, y=0)
        .add_node("B", x=10, y=0)
        .add_node("C", x=10, y=10)
        .add_node("D", x=0, y=10)
        .add_link("A", "B")
        .add_link("B", "C")
        .add_link("C", "D")
        .add_link("D", "A")
        .build()
    )


@pytest.fixture
def sample():
    return sample_graph()
