#!/usr/bin/env python3
"""Run configuration, optionally loaded from a YAML file."""

import codecs
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

ENGINES = ("openpyxl", "xlwings")

DEFAULTS: Dict[str, Any] = {
	"engine": None,  # platform default
	"encoding": "utf-8",
	"overwrite": True,
	"output_root": None,  # current working directory
	"log_level": "INFO",
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
	"""Load configuration from a YAML file on top of the defaults."""
	config = dict(DEFAULTS)
	if not config_path:
		return config
	if not os.path.exists(config_path):
		raise ConfigError(f"Config file not found: {config_path}")
	try:
		with open(config_path, "r", encoding="utf-8") as f:
			user_config = yaml.safe_load(f) or {}
	except yaml.YAMLError as e:
		raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
	if not isinstance(user_config, dict):
		raise ConfigError(f"Config file {config_path} must contain a mapping")
	unknown = sorted(set(user_config) - set(DEFAULTS))
	if unknown:
		raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
	config.update(user_config)
	if config["engine"] is not None and config["engine"] not in ENGINES:
		raise ConfigError(f"Unknown engine {config['engine']!r}, expected one of {', '.join(ENGINES)}")
	check_encoding(config["encoding"])
	return config


def check_encoding(encoding: Any) -> None:
	try:
		codecs.lookup(str(encoding))
	except LookupError as e:
		raise ConfigError(f"Unknown encoding {encoding!r}") from e
