"""Runtime services: telemetry and the key-handling orchestrator."""
