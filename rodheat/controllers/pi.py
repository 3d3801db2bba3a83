"""
PI controller for the heated rod, written as an augmented state-space loop.

    u(t) = Kp * e(t) + Ki * eps(t),    d eps/dt = e(t) = y_ref - C theta(t)

With the open-loop rod d theta/dt = A theta + B u + E w, the closed loop on
z = [theta; eps] reads

    dz/dt = [A - Kp B C   Ki B] z + [Kp B] y_ref + [E] w(theta_{N-1})
            [   -C          0 ]     [  1 ]         [0]

The integral state removes the steady-state offset of proportional control.

References:
- Astrom KJ, Murray RM. Feedback Systems. 2nd ed. Princeton, 2021.
  Chapter 7: State Feedback (integral action).
"""

import numpy as np
import scipy.sparse as sps

from rodheat.utils.parameters import KP, KI, Y_REF


class PIController:
    """
    Proportional-integral law with an explicit integral-error state.

    Parameters
    ----------
    Kp : float
        Proportional gain.
    Ki : float
        Integral gain.
    y_ref : float
        Reference temperature.
    """

    def __init__(self, Kp=KP, Ki=KI, y_ref=Y_REF):
        self.Kp = Kp
        self.Ki = Ki
        self.y_ref = y_ref

    def error(self, y):
        return self.y_ref - y

    def get_u(self, t, y, integral_error):
        """u = Kp * e + Ki * eps."""
        return self.Kp * self.error(y) + self.Ki * integral_error

    def closed_loop(self, A, B, C, E):
        """
        Assemble the augmented closed-loop system.

        Parameters
        ----------
        A : sparse matrix (N, N)
            Open-loop system matrix.
        B, E : ndarray (N,)
            Input and disturbance vectors.
        C : ndarray (N,)
            Output row selecting the measured temperature.

        Returns
        -------
        Acl : scipy.sparse.csr_matrix (N+1, N+1)
        Bcl : ndarray (N+1,)
            Reference input vector [Kp B; 1].
        Ecl : ndarray (N+1,)
            Disturbance vector [E; 0].
        """
        B = np.asarray(B, dtype=float).reshape(-1, 1)
        C = np.asarray(C, dtype=float).reshape(1, -1)
        E = np.asarray(E, dtype=float)

        top_left = sps.csr_matrix(A) - self.Kp * sps.csr_matrix(B @ C)
        Acl = sps.bmat([
            [top_left, sps.csr_matrix(self.Ki * B)],
            [sps.csr_matrix(-C), None],
        ], format="csr")

        Bcl = np.append(self.Kp * B.ravel(), 1.0)
        Ecl = np.append(E, 0.0)
        return Acl, Bcl, Ecl

    def reset(self):
        """The integral state lives in the loop state vector, nothing to reset."""
        pass
