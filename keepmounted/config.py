"""
keepmounted Configuration Module
Supports loading from:
1. INI config file (/etc/keepmounted/keepmounted.conf)
2. Environment variables (override config file)
3. Command line options (override everything)
4. Default values (fallback)
"""

import os
from configparser import ConfigParser, Error as ConfigParserError
from typing import Dict, Any, Optional

from keepmounted.drivers.system import DEFAULT_MOUNT_BIN, DEFAULT_UMOUNT_BIN
from keepmounted.models import (
    MountSpec, DEFAULT_CHECK_INTERVAL, DEFAULT_COMMAND_TIMEOUT, DEFAULT_MARKER_NAME
)
from keepmounted.utils.logger import get_logger
from keepmounted.utils.validators import require_option, require_file_name, parse_seconds

LOG = get_logger(__name__)


class KeepMountedConfig:
    """keepmounted configuration"""

    CONFIG_FILE = '/etc/keepmounted/keepmounted.conf'
    SECTION = 'keepmounted'
    ENV_PREFIX = 'KEEPMOUNTED_'

    DEFAULTS = {
        'source': '',
        'target': '',
        'type': '',
        'options': '',
        'interval': str(DEFAULT_CHECK_INTERVAL),
        'timeout': str(DEFAULT_COMMAND_TIMEOUT),
        'marker': DEFAULT_MARKER_NAME,
        'mount_bin': DEFAULT_MOUNT_BIN,
        'umount_bin': DEFAULT_UMOUNT_BIN,
        'log_level': 'INFO',
        'log_format': 'text',
    }

    def __init__(self, values: Optional[Dict[str, Any]] = None,
                 config_file: Optional[str] = None):
        self._values = dict(self.DEFAULTS)
        if values:
            self._values.update(values)
        self.config_file = config_file

    @classmethod
    def load(cls, config_file: Optional[str] = None,
             overrides: Optional[Dict[str, Any]] = None,
             environ: Optional[Dict[str, str]] = None) -> 'KeepMountedConfig':
        """
        Load configuration with priority: overrides > env var > config file > default.

        Args:
            config_file: Path to INI file (default: CONFIG_FILE)
            overrides: Values given on the command line; None entries are ignored
            environ: Environment mapping (default: os.environ)

        Returns:
            KeepMountedConfig
        """
        if config_file is None:
            config_file = cls.CONFIG_FILE
        if environ is None:
            environ = os.environ

        values = dict(cls.DEFAULTS)
        values.update(cls._load_ini_file(config_file))

        for key in cls.DEFAULTS:
            env_name = cls.ENV_PREFIX + key.upper()
            if env_name in environ:
                values[key] = environ[env_name]

        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        LOG.debug(f"Configuration loaded (file: {config_file})")
        return cls(values, config_file)

    @classmethod
    def _load_ini_file(cls, config_file: str) -> Dict[str, Any]:
        """
        Load configuration from INI file.

        Expected format:
        [keepmounted]
        source = server:/export
        target = /mnt/export
        type = nfs
        options = soft,timeo=600
        interval = 60
        """
        config_data = {}

        if not os.path.exists(config_file):
            LOG.debug(f"Config file not found: {config_file}, using defaults")
            return config_data

        try:
            parser = ConfigParser()
            parser.read(config_file)

            # [keepmounted] wins over [DEFAULT]
            if parser.has_section(cls.SECTION):
                items = parser.items(cls.SECTION)
            else:
                items = parser.defaults().items()

            for key, value in items:
                if key in cls.DEFAULTS:
                    config_data[key] = value
                else:
                    LOG.warning(f"Ignoring unknown config key '{key}' in {config_file}")

            LOG.info(f"Loaded {len(config_data)} config parameters from {config_file}")

        except ConfigParserError as e:
            LOG.error(f"Failed to load config file {config_file}: {e}")

        return config_data

    def get(self, key: str) -> Any:
        return self._values[key]

    @property
    def log_level(self) -> str:
        return self._values['log_level']

    @property
    def log_format(self) -> str:
        return self._values['log_format']

    @property
    def mount_bin(self) -> str:
        return self._values['mount_bin']

    @property
    def umount_bin(self) -> str:
        return self._values['umount_bin']

    def to_mount_spec(self) -> MountSpec:
        """
        Build the validated MountSpec.

        Raises:
            MissingOptionException if a required option is empty or a
            duration is not a whole number of seconds
        """
        source = require_option(self._values['source'], "-source device must be specified")
        target = require_option(self._values['target'], "-target path must be specified")
        fs_type = require_option(self._values['type'], "-type mount type must be specified")

        return MountSpec(
            source=source,
            target=target,
            fs_type=fs_type,
            options=self._values['options'] or '',
            check_interval=parse_seconds(self._values['interval'], 'interval'),
            command_timeout=parse_seconds(self._values['timeout'], 'timeout', minimum=1),
            marker_name=require_file_name(self._values['marker'], "marker"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)
