# radar/timing.py

from __future__ import annotations

from typing import Optional

import scipy.constants as sc

from radar.exceptions import ValidationError
from radar.validation import assert_nonnegative_int, assert_positive


class PulseTiming:
    """
    PRF/PRI/pulse-count bookkeeping.

    prf and pri are mutually inverse; assigning either validates it and
    updates the other in the same step.
    """

    def __init__(self, prf: Optional[float] = None, num_pulses: int = 1):
        self._prf: Optional[float] = None
        self._pri: Optional[float] = None
        if prf is not None:
            self.prf = prf
        self.num_pulses = num_pulses

    @property
    def prf(self) -> float:
        return self._prf

    @prf.setter
    def prf(self, val):
        val = assert_positive(val, "prf")
        self._prf, self._pri = val, 1 / val

    @property
    def pri(self) -> float:
        return self._pri

    @pri.setter
    def pri(self, val):
        val = assert_positive(val, "pri")
        self._pri, self._prf = val, 1 / val

    @property
    def num_pulses(self) -> int:
        return self._num_pulses

    @num_pulses.setter
    def num_pulses(self, val):
        self._num_pulses = assert_nonnegative_int(val, "num_pulses")

    def _require_prf(self):
        if self._prf is None:
            raise ValidationError("prf/pri must be set before deriving ambiguity limits")

    @property
    def range_unambig(self) -> float:
        self._require_prf()
        return sc.c * self._pri / 2

    @property
    def doppler_unambig(self) -> float:
        self._require_prf()
        return self._prf / 2

    def velocity_unambig(self, wavelength: float) -> float:
        self._require_prf()
        return wavelength * self._prf / 4

    @staticmethod
    def range_resolution(bandwidth: float) -> float:
        bandwidth = assert_positive(bandwidth, "bandwidth")
        return sc.c / (2 * bandwidth)
