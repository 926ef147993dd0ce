"""
Startup exceptions for keepmounted

Each exception carries the process exit code for its failure category.
Operational failures (probe, mount, unmount) never raise; they are logged
and retried by the reconciler.
"""

EXIT_MISSING_OPTION = 1
EXIT_TARGET_PATH = 2
EXIT_PRIVILEGE = 3
EXIT_UNHEALTHY = 4


class KeepMountedException(Exception):
    """Base exception for keepmounted"""
    exit_code = 1


class ConfigurationException(KeepMountedException):
    """Exception raised for missing or invalid configuration"""
    exit_code = EXIT_MISSING_OPTION


class MissingOptionException(ConfigurationException):
    """Exception raised when a required option is empty"""
    pass


class TargetPathException(KeepMountedException):
    """Exception raised when the target path is missing or not a directory"""
    exit_code = EXIT_TARGET_PATH


class PrivilegeException(KeepMountedException):
    """Exception raised when not running as root"""
    exit_code = EXIT_PRIVILEGE
