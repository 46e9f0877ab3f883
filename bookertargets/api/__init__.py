"""HTTP API for monthly targets and the dashboard."""
