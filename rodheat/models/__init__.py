"""Discretisation, evaluators, integrator and analytical solutions."""
