"""Smoke tests for the plotting helpers."""

import jax.numpy as jnp
import matplotlib.pyplot as plt
import numpy as np
import pytest

import hodographs as hdg


@pytest.fixture
def helix() -> hdg.CatmullRom3:
    t = np.linspace(0, 2 * np.pi, 12)
    return hdg.CatmullRom3(np.stack([np.cos(t), np.sin(t), t / 4], axis=-1))


def test_plot_curve(helix: hdg.CatmullRom3) -> None:
    ax = hdg.plot_curve(helix, jnp.linspace(0, 1, 50))
    assert ax.name == "3d"
    assert len(ax.lines) == 1
    plt.close(ax.figure)


def test_plot_frames_on_existing_axes(helix: hdg.CatmullRom3) -> None:
    fig = plt.figure()
    ax = fig.add_subplot(projection="3d")
    out = hdg.plot_frames(helix, jnp.linspace(0.1, 0.9, 5), ax=ax)
    assert out is ax
    assert len(ax.collections) == 3
    plt.close(fig)
