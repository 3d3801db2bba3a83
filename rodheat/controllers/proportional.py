"""
Proportional controller for the heated rod.

    u(t) = Kp * e(t),    e(t) = y_ref - y(t)

where y(t) is the temperature at the right end of the rod. A proportional
law leaves a steady-state offset: at equilibrium Kp * e must balance the
heat lost at x = L, so e cannot vanish.

References:
- Astrom KJ, Murray RM. Feedback Systems: An Introduction for Scientists
  and Engineers. 2nd ed. Princeton University Press, 2021.
  Chapter 11: PID Control.
"""

from rodheat.utils.parameters import KP, Y_REF


class ProportionalController:
    """
    Static output feedback u = Kp * (y_ref - y).

    Parameters
    ----------
    Kp : float
        Proportional gain.
    y_ref : float
        Reference temperature.
    """

    def __init__(self, Kp=KP, y_ref=Y_REF):
        self.Kp = Kp
        self.y_ref = y_ref

    def error(self, y):
        """Tracking error e = y_ref - y."""
        return self.y_ref - y

    def get_u(self, t, y):
        """Return the control input for output temperature ``y``."""
        return self.Kp * self.error(y)

    def reset(self):
        """Proportional control is stateless, nothing to reset."""
        pass
