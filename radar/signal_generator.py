# radar/signal_generator.py

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from radar.antenna import (
    CosineElement,
    IsotropicElement,
    SingleElementAntenna,
    UniformLinearArray,
)
from radar.system import RadarSystem
from radar.timing import PulseTiming
from radar.units import Angle, Power, Scale
from radar.exceptions import ValidationError
from radar.validation import assert_finite_nonnegative, assert_vector3
from radar.waveform import Waveform, lfm_waveform, rect_waveform
from interference.clutter import ClutterRing
from interference.jammer import BarrageJammer


@dataclass
class Target:
    position: np.ndarray      # [x, y, z] meters
    velocity: np.ndarray      # [vx, vy, vz] m/s
    rcs: float                # Radar Cross Section (m^2, linear)

    def __post_init__(self):
        self.position = assert_vector3(self.position, "position")
        self.velocity = assert_vector3(self.velocity, "velocity")
        self.rcs = assert_finite_nonnegative(self.rcs, "rcs")


@dataclass
class Scenario:
    radar: RadarSystem
    targets: List[Target]
    clutter: Optional[ClutterRing] = None
    jammers: List[BarrageJammer] = field(default_factory=list)


def _power(cfg, default_scale: str = "dB") -> Power:
    """Accept {"value": x, "scale": "dB"} or a bare number in default_scale."""
    if isinstance(cfg, dict):
        return Power(cfg["value"], cfg.get("scale", default_scale))
    return Power(cfg, default_scale)


def _angle(cfg, default_unit: str = "degrees") -> Angle:
    """
    Accept {"value": x, "unit": ...}, {"start", "stop", "num", "unit"} for an
    evenly spaced grid, or a bare number/list in default_unit.
    """
    if isinstance(cfg, dict):
        unit = cfg.get("unit", default_unit)
        if "start" in cfg:
            return Angle(np.linspace(cfg["start"], cfg["stop"], int(cfg["num"])), unit)
        return Angle(cfg["value"], unit)
    return Angle(cfg, default_unit)


def _build_element(cfg: Dict):
    gain = _power(cfg.get("gain", 0.0))
    kind = cfg.get("type", "isotropic").lower()
    if kind == "isotropic":
        return IsotropicElement(gain)
    if kind == "cosine":
        return CosineElement(gain, exponent=cfg.get("exponent", 1.5))
    raise ValidationError(f"Unsupported element type: {kind}")


def _build_antenna(cfg: Dict):
    element = _build_element(cfg.get("element", {}))
    kind = cfg.get("type", "ula").lower()
    if kind == "single":
        return SingleElementAntenna(element, cfg["center_freq"])
    if kind == "ula":
        if "element_spacing" in cfg:
            return UniformLinearArray(element, cfg["num_elements"],
                                      cfg["element_spacing"], cfg["center_freq"])
        return UniformLinearArray.half_wavelength(element, cfg["num_elements"], cfg["center_freq"])
    raise ValidationError(f"Unsupported antenna type: {kind}")


def _build_waveform(cfg: Dict) -> Waveform:
    kind = cfg.get("type", "lfm").lower()
    if kind == "lfm":
        return lfm_waveform(cfg["bandwidth"], cfg["pulse_width"], cfg["samp_rate"])
    if kind == "rect":
        return rect_waveform(cfg["pulse_width"], cfg["samp_rate"])
    raise ValidationError(f"Unsupported waveform type: {kind}")


def generate_scenario(config: Dict) -> Scenario:
    """
    Builds a simulation scenario from a configuration dictionary.

    This function acts as the system boundary between configuration input
    and simulation execution: unit tags are attached here and nowhere else.
    """
    radar_cfg = config["radar"]

    radar = RadarSystem(
        antenna=_build_antenna(config["antenna"]),
        waveform=_build_waveform(config["waveform"]),
        timing=PulseTiming(prf=radar_cfg["prf"], num_pulses=radar_cfg["num_pulses"]),
        position=radar_cfg.get("position", [0, 0, 0]),
        velocity=radar_cfg.get("velocity", [0, 0, 0]),
        tx_power=radar_cfg["tx_power"],
        loss_system=_power(radar_cfg.get("loss_system", 0.0)),
        noise_fig=_power(radar_cfg.get("noise_fig", 0.0)),
        temperature_noise=radar_cfg.get("temperature_noise", 290.0),
        bandwidth=radar_cfg.get("bandwidth"),
        scale=Scale.parse(radar_cfg.get("scale", "dB")),
    )

    targets = []
    for tgt in config.get("targets", []):
        targets.append(Target(
            position=np.array(tgt["position"], dtype=float),
            velocity=np.array(tgt.get("velocity", [0, 0, 0]), dtype=float),
            rcs=float(tgt["rcs"]),
        ))

    clutter = None
    if config.get("clutter") is not None:
        clt = config["clutter"]
        clutter = ClutterRing(
            azimuth=_angle(clt["azimuth"]),
            elevation=_angle(clt.get("elevation", 0.0)),
            patch_cnr=_power(clt["cnr"]),
        )

    jammers = []
    for jam in config.get("jammers", []):
        jammers.append(BarrageJammer(
            azimuth=_angle(jam["azimuth"]),
            elevation=_angle(jam.get("elevation", 0.0)),
            range=float(jam["range"]),
            eff_radiated_power=_power(jam["eff_radiated_power"]),
        ))

    return Scenario(radar=radar, targets=targets, clutter=clutter, jammers=jammers)


def load_scenario(path) -> Scenario:
    """Reads the generate_scenario() dictionary from a JSON file."""
    with Path(path).open("r", encoding="utf-8") as fh:
        return generate_scenario(json.load(fh))


def generate_thermal_noise(shape, noise_power: float, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Complex white Gaussian noise with total variance noise_power (linear, W).
    """
    rng = np.random.default_rng() if rng is None else rng
    sigma = np.sqrt(noise_power / 2)
    return sigma * (rng.standard_normal(shape) + 1j * rng.standard_normal(shape))


def add_thermal_noise(radar: RadarSystem, data: np.ndarray,
                      rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Adds receiver thermal noise (kTBF) to data of any shape.
    """
    data = np.asarray(data)
    return data + generate_thermal_noise(data.shape, radar.power_noise_linear, rng)
