"""
Data processing utilities for the posture engine.

Modules:
- serialization: JSON round-trip of landmark sets and metrics
"""
