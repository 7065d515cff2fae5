"""Service Layer: request orchestration over core rules and infrastructure adapters."""
