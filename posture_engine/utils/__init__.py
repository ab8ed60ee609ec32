"""
Shared utilities for the posture engine.

Modules:
- angle_utils: 2D vector and angle primitives (numpy)
- periodic_logger: Aggregated periodic timing logs
"""
