"""Feedback laws for the actuated rod."""

from rodheat.controllers.pi import PIController
from rodheat.controllers.proportional import ProportionalController
