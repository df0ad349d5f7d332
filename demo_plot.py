import logging

import matplotlib.pyplot as plt
import numpy as np

from diagnostics.logger import configure_logging
from diagnostics.metrics import MetricsRegistry
from interference.covariance import smi_covariance
from processing.pipeline import run_cpi
from radar.signal_generator import generate_scenario
from visualization.range_doppler_plot import plot_range_doppler, plot_eigenspectrum


configure_logging(logging.INFO)

# -----------------------------
# Scenario
# -----------------------------
config = {
    "antenna": {
        "type": "ula",
        "num_elements": 8,
        "center_freq": 10e9,
        "element": {"type": "cosine", "gain": {"value": 5, "scale": "dB"}, "exponent": 1.5},
    },
    "waveform": {"type": "lfm", "bandwidth": 5e6, "pulse_width": 10e-6, "samp_rate": 10e6},
    "radar": {
        "prf": 5000,
        "num_pulses": 16,
        "tx_power": 200e3,
        "loss_system": {"value": 3, "scale": "dB"},
        "noise_fig": {"value": 5, "scale": "dB"},
        "velocity": [0, 100, 0],
        "scale": "dB",
    },
    "targets": [
        {"position": [8e3, 1e3, 0], "velocity": [-120, 0, 0], "rcs": 10.0},
        {"position": [20e3, -2e3, 0], "velocity": [40, 10, 0], "rcs": 5.0},
    ],
    "clutter": {
        "azimuth": {"start": -90, "stop": 90, "num": 181, "unit": "degrees"},
        "elevation": {"value": -5, "unit": "degrees"},
        "cnr": {"value": 20, "scale": "dB"},
    },
    "jammers": [
        {"azimuth": {"value": 30, "unit": "degrees"}, "range": 50e3,
         "eff_radiated_power": {"value": -50, "scale": "dB"}},
    ],
}

scenario = generate_scenario(config)
radar = scenario.radar
metrics = MetricsRegistry()
rng = np.random.default_rng(1)

print(f"Unambiguous range:    {radar.range_unambig / 1e3:.1f} km")
print(f"Unambiguous velocity: {radar.velocity_unambig:.2f} m/s")
print(f"Clutter rank:         {radar.clutter_rank()}")

# -----------------------------
# Detection path
# -----------------------------
result = run_cpi(radar, scenario.targets, rng=rng, metrics=metrics, pfa=1e-6)

# -----------------------------
# Interference statistics path
# -----------------------------
ru = smi_covariance(radar, scenario.clutter, scenario.jammers,
                    num_snapshots=4 * radar.num_pulses * radar.num_elements,
                    rng=rng, metrics=metrics)

print(metrics.snapshot())

fig, (ax_rd, ax_eig) = plt.subplots(1, 2, figsize=(14, 5))
plot_range_doppler(result.rd_map, result.range_axis, result.velocity_axis,
                   detections=result.detections, title="Simulated CPI", ax=ax_rd)
plot_eigenspectrum(ru, noise_power=radar.normalized().power_noise, ax=ax_eig)
plt.tight_layout()
plt.show()
