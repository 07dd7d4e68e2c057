"""Application layer: DTOs, ports (interfaces), and the core services."""
