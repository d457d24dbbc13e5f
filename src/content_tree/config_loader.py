"""YAML configuration loading and validation.

This module handles loading and saving repository settings from YAML files.
Credentials are never stored here; they come from the environment (see
src.github_client.auth).
"""

import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, FilesystemError
from .models import RepositoryConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        src_path: "docs"
        ref: "main"
        extensions: [".md", ".mdx"]
        recursive: true
        max_workers: 10
        timeout: 30

    Every field is optional; missing fields take RepositoryConfig defaults.
    """

    DEFAULT_CONFIG_FILE = '.gitcms.yaml'

    @classmethod
    def load(cls, config_path: str) -> RepositoryConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            RepositoryConfig with parsed settings

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
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

        if config_dict is None:
            return RepositoryConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: RepositoryConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: RepositoryConfig to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'src_path': config.src_path,
            'ref': config.ref,
            'extensions': list(config.extensions),
            'recursive': config.recursive,
            'max_workers': config.max_workers,
            'timeout': config.timeout,
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
    def _parse_config(cls, config_dict: Dict[str, Any]) -> RepositoryConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated RepositoryConfig

        Raises:
            ConfigError: If configuration is invalid
        """
        defaults = RepositoryConfig()

        extensions_raw = config_dict.get('extensions', list(defaults.extensions))
        if isinstance(extensions_raw, str):
            extensions_raw = [extensions_raw]
        if not isinstance(extensions_raw, list) or not extensions_raw:
            raise ConfigError(
                "Field 'extensions' must be a non-empty list",
                'extensions'
            )

        extensions = []
        for ext in extensions_raw:
            ext = str(ext).strip()
            if not ext:
                raise ConfigError("Extensions cannot be empty", 'extensions')
            extensions.append(ext if ext.startswith('.') else f".{ext}")

        try:
            src_path = str(config_dict.get('src_path') or defaults.src_path)
            ref = str(config_dict.get('ref') or defaults.ref)
            recursive = bool(config_dict.get('recursive', defaults.recursive))
            max_workers = int(config_dict.get('max_workers', defaults.max_workers))
            timeout = int(config_dict.get('timeout', defaults.timeout))
        except (ValueError, TypeError) as e:
            raise ConfigError(
                f"Invalid field type: {str(e)}"
            )

        if not ref.strip():
            raise ConfigError("Field 'ref' cannot be empty", 'ref')

        if max_workers < 1:
            raise ConfigError(
                f"Field 'max_workers' must be at least 1, got {max_workers}",
                'max_workers'
            )

        if timeout < 1:
            raise ConfigError(
                f"Field 'timeout' must be at least 1, got {timeout}",
                'timeout'
            )

        return RepositoryConfig(
            src_path=src_path,
            ref=ref,
            extensions=tuple(extensions),
            recursive=recursive,
            max_workers=max_workers,
            timeout=timeout,
        )
