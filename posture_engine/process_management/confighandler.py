import copy
import json
import logging
from pathlib import Path

from ..landmarks.synthetic import SyntheticConfig
from ..metrics.metrics_dataclasses import MetricsConfig

logger = logging.getLogger(__name__)


class ConfigHandler:
    """Handles loading and saving configuration for the posture engine"""

    DEFAULT_CONFIG = {
        "synthetic": {
            "tibial_tuberosity_ratio": 0.15,
            "jugular_offset_ratio": 0.07,
            "c7_up_ratio": 0.30,
            "c7_back_ratio": 0.40
        },
        "metrics": {
            "cva_alert_threshold_deg": 48.0,
            "log_period": 100
        },
        "logging": {
            "level": "INFO"
        }
    }

    def __init__(self, config_file=None):
        # Without a file the handler serves defaults and never touches disk
        self.config_file = Path(config_file) if config_file is not None else None
        if self.config_file is not None:
            logger.debug(f"[ConfigHandler] Initializing with config file: {self.config_file.absolute()} "
                         f"(exists: {self.config_file.exists()})")
        self.config = self.load_config()

    def load_config(self):
        """Load configuration from file, or fall back to defaults"""
        if self.config_file is None:
            return copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    loaded_config = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"[ConfigHandler] Error loading config: {e}")
                return copy.deepcopy(self.DEFAULT_CONFIG)

            if not isinstance(loaded_config, dict):
                logger.error(f"[ConfigHandler] Config root must be an object, got {type(loaded_config).__name__}")
                return copy.deepcopy(self.DEFAULT_CONFIG)

            # Merge with defaults to ensure all keys exist
            return self._merge_configs(self.DEFAULT_CONFIG, loaded_config)

        # Create default config file
        config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save_config(config)
        return config

    def _merge_configs(self, default, loaded):
        """Recursively merge loaded config with defaults, preserving loaded values"""
        result = copy.deepcopy(loaded)

        for key, value in default.items():
            if key not in result:
                result[key] = copy.deepcopy(value)
            elif isinstance(value, dict) and isinstance(result[key], dict):
                result[key] = self._merge_configs(value, result[key])

        return result

    def save_config(self, config=None):
        """Save configuration to file. Returns False when nothing was written."""
        if self.config_file is None:
            return False
        if config is None:
            config = self.config
        try:
            with open(self.config_file, 'w') as f:
                json.dump(config, f, indent=4)
        except OSError as e:
            logger.error(f"[ConfigHandler] Error saving config: {e}")
            return False
        logger.info(f"[ConfigHandler] Configuration saved to {self.config_file}")
        return True

    def get(self, key_path, default=None):
        """Get config value using dot notation (e.g., 'synthetic.c7_back_ratio')"""
        keys = key_path.split('.')
        value = self.config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path, value):
        """Set config value using dot notation; persisted when a file is configured"""
        keys = key_path.split('.')
        config = self.config
        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]
        config[keys[-1]] = value
        self.save_config()

    def get_synthetic_config(self) -> SyntheticConfig:
        return SyntheticConfig.from_dict(self.get('synthetic'))

    def get_metrics_config(self) -> MetricsConfig:
        return MetricsConfig.from_dict(self.get('metrics'))


def configure_logging(config_handler: ConfigHandler):
    """Apply 'logging.level' to the posture_engine logger hierarchy."""
    level_name = str(config_handler.get('logging.level', 'INFO')).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning(f"[ConfigHandler] Unknown logging level '{level_name}', using INFO")
        level = logging.INFO
    logging.getLogger('posture_engine').setLevel(level)
    return level
