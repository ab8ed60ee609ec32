"""
Configuration Validation Module for the posture engine
Provides validation and detailed error reporting for configuration issues.
"""

import logging
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Raised when a configuration fails validation and the caller asked to fail fast."""
    def __init__(self, message: str, errors: List[str] = None, warnings: List[str] = None):
        super().__init__(message)
        self.errors = errors or []
        self.warnings = warnings or []


class ConfigValidator:
    """
    Configuration validator with detailed error reporting.

    Errors make the configuration unusable; warnings flag values that are
    legal but clinically or practically suspicious.
    """

    REQUIRED_STRUCTURE = {
        'synthetic': [
            'tibial_tuberosity_ratio',
            'jugular_offset_ratio',
            'c7_up_ratio',
            'c7_back_ratio'
        ],
        'metrics': [
            'cva_alert_threshold_deg',
            'log_period'
        ]
    }

    def __init__(self):
        self.validation_errors = []
        self.validation_warnings = []

    def validate_configuration(self, config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """
        Validate a full configuration dictionary.

        Returns:
            Tuple[bool, List[str], List[str]]: (is_valid, errors, warnings)
        """
        self.validation_errors = []
        self.validation_warnings = []

        if not isinstance(config, dict):
            self.validation_errors.append(
                f"Configuration must be a dictionary, got {type(config).__name__}"
            )
            return False, self.validation_errors, self.validation_warnings

        # 1. Validate structure and required keys
        self._validate_structure(config)

        # 2. Validate synthetic landmark ratios
        self._validate_synthetic(config)

        # 3. Validate metrics settings
        self._validate_metrics(config)

        # 4. Validate logging settings
        self._validate_logging(config)

        is_valid = len(self.validation_errors) == 0

        if is_valid:
            logger.debug("Configuration validation passed")
        else:
            logger.error(f"Configuration validation failed with {len(self.validation_errors)} errors")

        return is_valid, self.validation_errors, self.validation_warnings

    def require_valid(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate and raise ConfigValidationError on any error.

        Returns:
            List[str]: Warnings, when the configuration is valid
        """
        is_valid, errors, warnings = self.validate_configuration(config)
        if not is_valid:
            raise ConfigValidationError(
                f"Invalid configuration: {'; '.join(errors)}",
                errors=list(errors),
                warnings=list(warnings),
            )
        return list(warnings)

    def _validate_structure(self, config: Dict[str, Any]):
        """Validate basic configuration structure."""
        for section, required_keys in self.REQUIRED_STRUCTURE.items():
            if section not in config:
                self.validation_errors.append(
                    f"Missing required configuration section: '{section}'"
                )
                continue

            section_config = config[section]
            if not isinstance(section_config, dict):
                self.validation_errors.append(
                    f"Configuration section '{section}' must be a dictionary, got {type(section_config).__name__}"
                )
                continue

            for key in required_keys:
                if key not in section_config:
                    self.validation_errors.append(
                        f"Missing required key '{key}' in section '{section}'"
                    )

    def _validate_synthetic(self, config: Dict[str, Any]):
        """Ratios are fractions of a body length and must lie in [0, 1]."""
        synthetic = config.get('synthetic')
        if not isinstance(synthetic, dict):
            return

        for key in self.REQUIRED_STRUCTURE['synthetic']:
            value = synthetic.get(key)
            if value is None:
                continue
            if not self._is_number(value) or not 0.0 <= value <= 1.0:
                self.validation_errors.append(
                    f"Invalid synthetic.{key}: {value}. Must be a number in [0, 1]."
                )

        ratio = synthetic.get('tibial_tuberosity_ratio')
        if self._is_number(ratio) and ratio > 0.5:
            self.validation_warnings.append(
                f"synthetic.tibial_tuberosity_ratio ({ratio}) places the tibial tuberosity "
                f"closer to the ankle than the knee"
            )

    def _validate_metrics(self, config: Dict[str, Any]):
        """Validate the alert threshold and periodic log interval."""
        metrics = config.get('metrics')
        if not isinstance(metrics, dict):
            return

        threshold = metrics.get('cva_alert_threshold_deg')
        if threshold is not None:
            if not self._is_number(threshold) or not 0.0 < threshold < 180.0:
                self.validation_errors.append(
                    f"Invalid cva_alert_threshold_deg: {threshold}. Must be in (0, 180) degrees."
                )
            elif not 30.0 <= threshold <= 70.0:
                self.validation_warnings.append(
                    f"cva_alert_threshold_deg ({threshold}) is outside the usual clinical range 30-70°"
                )

        log_period = metrics.get('log_period')
        if log_period is not None:
            if isinstance(log_period, bool) or not isinstance(log_period, int) or log_period < 1:
                self.validation_errors.append(
                    f"Invalid log_period: {log_period}. Must be positive integer."
                )

    def _validate_logging(self, config: Dict[str, Any]):
        """Logging is optional; an unknown level is an error."""
        logging_config = config.get('logging')
        if logging_config is None:
            return
        if not isinstance(logging_config, dict):
            self.validation_errors.append(
                f"Configuration section 'logging' must be a dictionary, got {type(logging_config).__name__}"
            )
            return

        level = logging_config.get('level')
        if level is not None and str(level).upper() not in VALID_LOG_LEVELS:
            self.validation_errors.append(
                f"Invalid logging.level: {level}. Must be one of {', '.join(VALID_LOG_LEVELS)}."
            )

    def _is_number(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def create_diagnostic_report(self, config: Dict[str, Any]) -> str:
        """Create a diagnostic report from the last validation run."""
        report = []
        report.append("=" * 60)
        report.append("Posture Engine Configuration Diagnostic Report")
        report.append("=" * 60)
        report.append("")

        if self.validation_errors:
            report.append("CRITICAL ERRORS:")
            for i, error in enumerate(self.validation_errors, 1):
                report.append(f"  {i}. {error}")
            report.append("")

        if self.validation_warnings:
            report.append("WARNINGS:")
            for i, warning in enumerate(self.validation_warnings, 1):
                report.append(f"  {i}. {warning}")
            report.append("")

        report.append("Configuration Summary:")
        synthetic = config.get('synthetic', {}) if isinstance(config, dict) else {}
        metrics = config.get('metrics', {}) if isinstance(config, dict) else {}
        report.append(f"  C7 ratios (up/back): {synthetic.get('c7_up_ratio', 'Unknown')}"
                      f" / {synthetic.get('c7_back_ratio', 'Unknown')}")
        report.append(f"  CVA alert threshold: {metrics.get('cva_alert_threshold_deg', 'Unknown')}")
        report.append(f"  Log period: {metrics.get('log_period', 'Unknown')}")

        return "\n".join(report)


def validate_config_and_report(config: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Convenience function to validate configuration and generate report.

    Returns:
        Tuple[bool, str]: (is_valid, diagnostic_report)
    """
    validator = ConfigValidator()
    is_valid, _, _ = validator.validate_configuration(config)
    return is_valid, validator.create_diagnostic_report(config)
