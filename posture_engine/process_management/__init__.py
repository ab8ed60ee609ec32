"""
Configuration loading and validation.

Modules:
- confighandler: JSON config with defaults and dot-path access
- config_validator: Range and type validation of config values
"""
