"""HTTP API for owner contact processing."""
