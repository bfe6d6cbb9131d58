"""YAML configuration loading and validation.

This module loads and saves converter options from a YAML file. The file is
optional: a missing default file means every option keeps its default.
"""

import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, FilesystemError
from .models import ConverterConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        max_quote_depth: 32
        sort_metadata_keys: false
        workers: 4
        markdown_suffix: ".md"
        adf_suffix: ".json"
        indent_json: 2
    """

    DEFAULT_CONFIG_FILE = '.adf-markdown.yaml'

    # Expected type of each option; indent_json may also be null
    FIELD_TYPES = {
        'max_quote_depth': int,
        'sort_metadata_keys': bool,
        'workers': int,
        'markdown_suffix': str,
        'adf_suffix': str,
        'indent_json': int,
    }

    NULLABLE_FIELDS = {'indent_json'}

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> ConverterConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML file. When None, the default file in
                the working directory is used if it exists.

        Returns:
            ConverterConfig with parsed options

        Raises:
            FilesystemError: If an explicitly named file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        if config_path is None:
            if not os.path.exists(cls.DEFAULT_CONFIG_FILE):
                return ConverterConfig()
            config_path = cls.DEFAULT_CONFIG_FILE

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # Empty file keeps the defaults
        if config_dict is None:
            return ConverterConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: ConverterConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: ConverterConfig to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'max_quote_depth': config.max_quote_depth,
            'sort_metadata_keys': config.sort_metadata_keys,
            'workers': config.workers,
            'markdown_suffix': config.markdown_suffix,
            'adf_suffix': config.adf_suffix,
            'indent_json': config.indent_json,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConverterConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConverterConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_fields = set(config_dict.keys()) - set(cls.FIELD_TYPES)
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        for field_name, value in config_dict.items():
            expected = cls.FIELD_TYPES[field_name]
            if value is None and field_name in cls.NULLABLE_FIELDS:
                continue
            # bool is a subclass of int; reject it for integer options
            if expected is int and isinstance(value, bool):
                raise ConfigError("must be an integer", field_name)
            if not isinstance(value, expected):
                raise ConfigError(
                    f"must be of type {expected.__name__}, got {type(value).__name__}",
                    field_name
                )

        config = ConverterConfig(**config_dict)

        if config.max_quote_depth < 1:
            raise ConfigError("must be at least 1", 'max_quote_depth')
        if config.workers < 1:
            raise ConfigError("must be at least 1", 'workers')
        for suffix_field in ('markdown_suffix', 'adf_suffix'):
            if not getattr(config, suffix_field).startswith('.'):
                raise ConfigError("must start with '.'", suffix_field)
        if config.markdown_suffix == config.adf_suffix:
            raise ConfigError("markdown_suffix and adf_suffix must differ")

        return config
