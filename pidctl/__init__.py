from pidctl.core.clock import ManualClock, monotonic
from pidctl.core.config import ControllerConfig, TrackingConfig
from pidctl.core.errors import ControllerWarning, InvalidConfiguration
from pidctl.feedback.pid import Controller, ControllerState
from pidctl.feedback.tracking import TrackingController, TrackingState

__version__ = "0.1.0"
__all__ = [
    "Controller",
    "ControllerConfig",
    "ControllerState",
    "ControllerWarning",
    "InvalidConfiguration",
    "ManualClock",
    "TrackingConfig",
    "TrackingController",
    "TrackingState",
    "monotonic",
]
