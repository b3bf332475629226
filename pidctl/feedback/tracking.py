# pidctl/feedback/tracking.py
from dataclasses import dataclass

import numpy as np

from pidctl.core.config import TrackingConfig


@dataclass(frozen=True)
class TrackingState:
    e: float = 0.0
    e_i: float = 0.0
    u_i: float = 0.0
    u_d: float = 0.0
    u_v: float = 0.0


class TrackingController:
    """PIDT1 controller with feed-forward, anti-windup and bumpless transfer.

    The DT1 part behaves like a D part up to the cut-off frequency
    1/low_pass_time_constant. Anti-windup and bumpless transfer use tracking
    mode (Astrom and Murray, Feedback Systems, 2008, chapter 6): the error fed
    to the integrator on the next step is corrected by
    anti_windup_gain * (actual_input - u_v), where actual_input is what the
    actuator really applied and u_v is the unsaturated command.

    No input validation is done in `update`; the sampling interval is always
    supplied by the caller.
    """

    def __init__(self, config: TrackingConfig):
        self.config = config
        self._state = TrackingState()

    def reset(self):
        self._state = TrackingState()

    def get_state(self) -> TrackingState:
        return self._state

    def update(self, target: float, actual: float, feed_forward: float, actual_input: float, dt: float) -> float:
        cfg = self.config
        prev = self._state
        tau = cfg.low_pass_time_constant

        e = target - actual
        u_p = e * cfg.proportional_gain
        u_i = prev.e_i * cfg.integral_gain * dt + prev.u_i
        u_d = ((cfg.derivative_gain / tau) * (e - prev.e) + prev.u_d) / (dt / tau + 1)
        u_v = u_p + u_i + u_d + feed_forward
        e_i = e + cfg.anti_windup_gain * (actual_input - u_v)

        self._state = TrackingState(e=e, e_i=e_i, u_i=u_i, u_d=u_d, u_v=u_v)
        return float(np.clip(u_v, cfg.min_output, cfg.max_output))
