"""YAML configuration loading and validation.

This module handles loading and saving the zdocs configuration. The
configuration names the registered product pages and the property store
snapshot the resolution engines read.
"""

import os
from typing import Any, Dict, List

import yaml

from .errors import ConfigError, FilesystemError
from .models import ZDocsConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        product_pages:
          - "Foo"
          - "Acme/Widget"
        store_path: "pages.yaml"
        link_prefix: "/wiki/"
        process_directives: true
    """

    DEFAULT_CONFIG_DIR = '.zdocs'
    DEFAULT_CONFIG_FILE = 'config.yaml'

    REQUIRED_FIELDS = {'product_pages', 'store_path'}

    DEFAULTS = {
        'link_prefix': '/wiki/',
        'process_directives': True,
    }

    @classmethod
    def default_path(cls) -> str:
        return os.path.join(cls.DEFAULT_CONFIG_DIR, cls.DEFAULT_CONFIG_FILE)

    @classmethod
    def load(cls, config_path: str) -> ZDocsConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ZDocsConfig object with parsed configuration

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
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: ZDocsConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: ZDocsConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'product_pages': list(config.product_pages),
            'store_path': config.store_path,
            'link_prefix': config.link_prefix,
            'process_directives': config.process_directives,
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
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ZDocsConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ZDocsConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = cls.REQUIRED_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        product_pages = cls._parse_product_pages(config_dict['product_pages'])

        store_path = config_dict['store_path']
        if not isinstance(store_path, str) or not store_path.strip():
            raise ConfigError(
                "Field 'store_path' must be a non-empty string",
                'store_path'
            )

        link_prefix = config_dict.get('link_prefix', cls.DEFAULTS['link_prefix'])
        if not isinstance(link_prefix, str):
            raise ConfigError(
                f"Field 'link_prefix' must be a string, got {type(link_prefix).__name__}",
                'link_prefix'
            )

        process_directives = config_dict.get('process_directives', cls.DEFAULTS['process_directives'])
        if not isinstance(process_directives, bool):
            raise ConfigError(
                f"Field 'process_directives' must be a boolean, got {type(process_directives).__name__}",
                'process_directives'
            )

        return ZDocsConfig(
            product_pages=product_pages,
            store_path=store_path.strip(),
            link_prefix=link_prefix,
            process_directives=process_directives
        )

    @classmethod
    def _parse_product_pages(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            raise ConfigError(
                f"Field 'product_pages' must be a list, got {type(value).__name__}",
                'product_pages'
            )

        product_pages = []
        for index, page in enumerate(value):
            if not isinstance(page, str) or not page.strip():
                raise ConfigError(
                    f"Entry {index} must be a non-empty string",
                    'product_pages'
                )
            product_pages.append(page.strip())
        return product_pages
