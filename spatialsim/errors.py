"""Error types raised or issued by the stepping engine."""


class ConfigurationError(ValueError):
    """Invalid simulation setup, rejected before the simulation can start."""


class NumericalInstabilityWarning(RuntimeWarning):
    """
    A tick produced non-finite positions or velocities.

    The tick's integration is rolled back and the simulation keeps running
    from the last good state.
    """
