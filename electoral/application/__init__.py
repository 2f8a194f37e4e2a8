"""Application layer: lifecycle controller, promotion gate and use cases."""
