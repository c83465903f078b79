"""Infrastructure helpers for Pickle+ deployments."""
