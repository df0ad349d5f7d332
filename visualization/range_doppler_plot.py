# visualization/range_doppler_plot.py
from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt


def to_display_db(power_map: np.ndarray, dynamic_range_dB: float) -> np.ndarray:
    """Power in dB relative to the peak, clipped to the dynamic range."""
    eps = 1e-30
    display_map = 10.0 * np.log10(power_map + eps)
    display_map = display_map - float(np.max(display_map))
    return np.clip(display_map, -dynamic_range_dB, 0.0)


def plot_range_doppler(
    rd_map: np.ndarray,
    range_axis: np.ndarray,
    velocity_axis: np.ndarray,
    detections: np.ndarray | None = None,
    dynamic_range_dB: float = 60.0,
    title: str = "Range-Doppler Map",
    ax=None,
):
    """
    Range-Doppler map with physical axes.

    rd_map is (range bins, Doppler bins) as produced by doppler_processing;
    it is drawn with velocity on x and range on y. detections is a boolean
    mask of the same shape, drawn as white circles.

    Returns:
        fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    else:
        fig = ax.figure

    display_map = to_display_db(np.abs(rd_map) ** 2, dynamic_range_dB)

    # Bin edges, not centres
    dv = velocity_axis[1] - velocity_axis[0] if velocity_axis.size > 1 else 1.0
    dr = range_axis[1] - range_axis[0] if range_axis.size > 1 else 1.0
    extent = [
        velocity_axis[0] - dv / 2, velocity_axis[-1] + dv / 2,
        range_axis[0] - dr / 2, range_axis[-1] + dr / 2,
    ]

    im = ax.imshow(
        display_map,
        aspect="auto",
        origin="lower",
        extent=extent,
        cmap="jet",
        vmin=-dynamic_range_dB,
        vmax=0.0,
        interpolation="nearest",
    )
    fig.colorbar(im, ax=ax, label="Power (dB)")

    if detections is not None:
        rows, cols = np.nonzero(detections)
        ax.scatter(
            velocity_axis[cols], range_axis[rows],
            marker="o",
            facecolors="none",
            edgecolors="white",
            linewidths=1.5,
        )

    ax.set_title(title)
    ax.set_xlabel("Velocity (m/s)")
    ax.set_ylabel("Range (m)")
    return fig, ax


def plot_eigenspectrum(covariance: np.ndarray, noise_power: float | None = None,
                       title: str = "Interference Eigenspectrum", ax=None):
    """
    Eigenvalues of a (Hermitian) covariance estimate in descending order, in dB,
    optionally relative to the noise power.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    hermitian = (covariance + covariance.conj().T) / 2
    eigenvalues = np.sort(np.abs(np.linalg.eigvalsh(hermitian)))[::-1]
    reference = 1.0 if noise_power is None else noise_power
    ax.plot(np.arange(1, eigenvalues.size + 1), 10 * np.log10(eigenvalues / reference + 1e-30), "o-")

    ax.set_title(title)
    ax.set_xlabel("Eigenvalue index")
    ax.set_ylabel("Eigenvalue (dB)" if noise_power is None else "Eigenvalue / noise (dB)")
    ax.grid(True)
    return fig, ax
