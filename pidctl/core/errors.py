# pidctl/core/errors.py


class InvalidConfiguration(ValueError):
    pass


class ControllerWarning(RuntimeWarning):
    """Issued when an update is skipped or degraded instead of raising."""
