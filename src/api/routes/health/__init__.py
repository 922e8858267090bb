"""Health checks (liveness e readiness)."""
