# pidctl/feedback/pid.py
import math
import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np

from pidctl.core.clock import Clock, monotonic
from pidctl.core.config import ControllerConfig
from pidctl.core.errors import ControllerWarning


@dataclass(frozen=True)
class ControllerState:
    control_error: float = 0.0
    control_error_integral: float = 0.0
    control_error_derivative: float = 0.0
    control_signal: float = 0.0
    # None until the first accepted update.
    last_update_time: Optional[float] = None


class Controller:
    """PID controller sampled on the elapsed time between calls to `update`.

    The integral term is held while the time since the previous update is at
    least `config.timeout`, so a paused loop does not resume with a jump in
    accumulated error. With `timeout == 0` the integral always accumulates,
    except on the first update after construction or reset.
    """

    def __init__(self, config: ControllerConfig, state: Optional[ControllerState] = None, clock: Optional[Clock] = None):
        self.config = config
        self.state = state if state is not None else ControllerState()
        self.clock = clock if clock is not None else monotonic

    @property
    def control_signal(self) -> float:
        return self.state.control_signal

    def reset(self):
        self.state = ControllerState()

    def update(self, reference_signal: float, actual_signal: float):
        if not self._finite_inputs(reference_signal, actual_signal):
            return

        now = self.clock()
        first_update = self.state.last_update_time is None
        dt = math.inf if first_update else now - self.state.last_update_time
        self._step(reference_signal, actual_signal, dt, first_update, now)

    def update_with_interval(self, reference_signal: float, actual_signal: float, dt: float):
        if not self._finite_inputs(reference_signal, actual_signal):
            return
        if not np.isfinite(dt) or dt < 0:
            warnings.warn(f"Invalid sampling interval {dt!r}, skipping update", ControllerWarning, stacklevel=2)
            return

        self._step(reference_signal, actual_signal, dt, False, self.clock())

    def _finite_inputs(self, reference_signal: float, actual_signal: float) -> bool:
        if np.isfinite(reference_signal) and np.isfinite(actual_signal):
            return True
        warnings.warn(
            f"Non-finite controller input (reference={reference_signal}, actual={actual_signal}), skipping update",
            ControllerWarning, stacklevel=3)
        return False

    def _step(self, reference_signal: float, actual_signal: float, dt: float, first_update: bool, now: float):
        previous = self.state
        timeout = self.config.timeout

        error = float(reference_signal - actual_signal)
        derivative = (error - previous.control_error) / dt if dt > 0 else 0.0

        integral = previous.control_error_integral
        if dt < timeout or (timeout == 0 and not first_update):
            integral += error * dt
        elif timeout > 0 and not first_update:
            warnings.warn(f"Sampling interval {dt:.3f}s reached timeout {timeout:.3f}s, holding integral term",
                          ControllerWarning, stacklevel=3)

        output = (self.config.proportional_gain * error
                  + self.config.integral_gain * integral
                  + self.config.derivative_gain * derivative)

        self.state = ControllerState(
            control_error=error,
            control_error_integral=integral,
            control_error_derivative=derivative,
            control_signal=output,
            last_update_time=now,
        )
