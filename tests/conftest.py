"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def make_scene():
    """Factory building a Scene from sphere and light descriptions.

    Scenes own their Taichi fields, so each test builds exactly what it needs
    and nothing has to be cleared between tests.
    """
    from src.whitted.scene.manager import Scene

    def _make(spheres=(), lights=(), background_color=(255.0, 255.0, 255.0)):
        return Scene(list(spheres), list(lights), background_color)

    return _make
