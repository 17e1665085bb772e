"""
Feature flags for the WSN analyzer.

Runtime switches for behaviour that has more than one defensible reading.
Default: every flag OFF, which reproduces the reference demo behaviour.

Usage:
    from wsn_analyzer.config.feature_flags import FeatureFlags

    if FeatureFlags.WAKE_NEAREST_ONLY:
        # one standby per death
    else:
        # every standby inside the wake radius
"""


class FeatureFlags:
    """
    Global feature flag registry.

    Invariant: flags change simulation outcomes only, never the DFS trace.
    The articulation-point step sequence is identical under every flag setting.
    """

    WAKE_NEAREST_ONLY = False
    """
    Restrict the wake rule to the single nearest sleeping standby.

    When False (default):
    - Every sleeping node strictly inside the wake radius of a node that died
      this tick is woken (several standbys can wake for one death).

    When True:
    - For each death only the nearest qualifying sleeper wakes.
    - Ties are broken by the lower node id.
    """

    @classmethod
    def enable_nearest_only_wake(cls):
        """Wake at most one standby per death."""
        cls.WAKE_NEAREST_ONLY = True

    @classmethod
    def disable_nearest_only_wake(cls):
        """Wake every standby in range (reference behaviour)."""
        cls.WAKE_NEAREST_ONLY = False

    @classmethod
    def reference_mode(cls):
        """Reset all flags to their documented defaults."""
        cls.WAKE_NEAREST_ONLY = False
