"""Parameters, metrics and plotting."""
