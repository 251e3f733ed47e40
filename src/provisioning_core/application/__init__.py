"""Application layer: template resolution service and completion tracking."""
