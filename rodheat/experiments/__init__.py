"""Scripts reproducing the rod heating studies."""
