# pidctl/core/config.py
import math
from dataclasses import dataclass

from pidctl.core.errors import InvalidConfiguration


@dataclass(frozen=True)
class ControllerConfig:
    proportional_gain: float = 0.0
    integral_gain: float = 0.0
    derivative_gain: float = 0.0
    # Max seconds between updates before the integral is held; 0 disables it.
    timeout: float = 0.0

    def __post_init__(self):
        self.validate_params()

    def validate_params(self):
        for name in ("proportional_gain", "integral_gain", "derivative_gain", "timeout"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidConfiguration(f"{name} must be finite")
        if self.timeout < 0:
            raise InvalidConfiguration("timeout must be non-negative")


@dataclass(frozen=True)
class TrackingConfig:
    proportional_gain: float = 0.0
    integral_gain: float = 0.0
    derivative_gain: float = 0.0
    anti_windup_gain: float = 0.0
    # D part low-pass filter time constant, cut-off frequency 1/low_pass_time_constant.
    low_pass_time_constant: float = 1.0
    max_output: float = math.inf
    min_output: float = -math.inf

    def __post_init__(self):
        self.validate_params()

    def validate_params(self):
        for name in ("proportional_gain", "integral_gain", "derivative_gain",
                     "anti_windup_gain", "low_pass_time_constant"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidConfiguration(f"{name} must be finite")
        if self.low_pass_time_constant <= 0:
            raise InvalidConfiguration("Low-pass time constant must be positive")
        if math.isnan(self.max_output) or math.isnan(self.min_output):
            raise InvalidConfiguration("Output limits must not be NaN")
        if self.min_output > self.max_output:
            raise InvalidConfiguration(
                f"min_output ({self.min_output}) exceeds max_output ({self.max_output})")
