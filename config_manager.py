"""Configuration management for the 8-Queens annealing experiments.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize the sweep grid, the demo run, and output naming.

File format (high-level)
------------------------
- sweep_settings: temperatures, decays, runs per pair, floor temperature,
  acceptance rule, and master seed.
- demo_settings: T0 and decay of the single demonstration run.
- output_settings: output directory, run tag, and datestamp policy.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist experiment configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_sweep_settings(self):
        """Return the sweep grid (temperatures, decays, runs, floor, seed)."""
        return self.config.get("sweep_settings", {})

    def get_demo_settings(self):
        """Return T0/decay for the demonstration run."""
        return self.config.get("demo_settings", {})

    def get_output_settings(self):
        """Return output directory and filename policy."""
        return self.config.get("output_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
