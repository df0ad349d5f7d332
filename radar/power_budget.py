# radar/power_budget.py

import numpy as np

from radar.ambiguity import true_range
from radar.exceptions import UnsupportedGeometryError
from radar.units import Scale


def cart2sph(x, y, z):
    """Azimuth from +x towards +y, elevation from the xy-plane (radians)."""
    azimuth = np.arctan2(y, x)
    elevation = np.arctan2(z, np.hypot(x, y))
    return azimuth, elevation


def received_power(radar, targets) -> np.ndarray:
    """
    Received power of each target from the radar range equation (monostatic, G_t = G_r):

        P_r = P_t * G^2 * lambda^2 * rcs / ((4*pi)^3 * L * R^4)

    G is the element gain times the element's normalized power pattern in the
    direction of the target. Output follows ``radar.scale``.
    """
    if not radar.antenna.has_aperture:
        raise UnsupportedGeometryError("received_power requires an antenna array")

    work = radar.normalized()
    los = np.array([t.position for t in targets], dtype=float).reshape(-1, 3) - work.position
    az, el = cart2sph(los[:, 0], los[:, 1], los[:, 2])
    gain = work.antenna.element.gain.linear * work.antenna.element.norm_power_gain(az, el)

    ranges = true_range(work, targets)
    rcs = np.array([t.rcs for t in targets], dtype=float)
    power = (work.tx_power * gain ** 2 * work.wavelength ** 2 * rcs
             / ((4 * np.pi) ** 3 * work.loss_system.linear * ranges ** 4))

    return radar.to_output_scale(power)


def snr(radar, targets) -> np.ndarray:
    """Per-target SNR; ratio for linear radars, difference for dB radars."""
    power = received_power(radar, targets)
    if radar.scale is Scale.DB:
        return power - radar.power_noise
    return power / radar.power_noise
