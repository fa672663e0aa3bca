"""Host integrations for the orchestrator."""
