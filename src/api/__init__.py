"""HTTP API: admission webhook and operational endpoints."""
