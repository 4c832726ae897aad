"""Resource path resolution for packaged data and project configuration.

Data files (the performance tables) ship inside the package so they resolve the
same way from a source checkout and from an installed wheel. Configuration
files live at the project root under ``config/``.

Typical usage:
    from airperf.core.resource_path import get_data_path, get_config_path

    table_path = get_data_path("performance_tables.yaml")
    settings_path = get_config_path("settings.yaml")
"""

from pathlib import Path


def get_package_root() -> Path:
    """Get the directory of the installed ``airperf`` package.

    Returns:
        Path to ``src/airperf`` in a checkout, or the installed package directory.
    """
    return Path(__file__).parent.parent


def get_project_root() -> Path:
    """Get the project root directory (source checkout layout).

    Returns:
        Path two levels above the package directory (``src/airperf`` -> root).
    """
    return get_package_root().parent.parent


def get_data_path(data_file: str) -> Path:
    """Get path to a data file shipped with the package.

    Args:
        data_file: Data filename or relative path (e.g., "performance_tables.yaml")

    Returns:
        Absolute path to the data file.

    Examples:
        >>> get_data_path("performance_tables.yaml").name
        'performance_tables.yaml'
    """
    return get_package_root() / "data" / data_file


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file.

    Args:
        config_file: Config filename or relative path (e.g., "settings.yaml")

    Returns:
        Absolute path to the config file.
    """
    return get_project_root() / "config" / config_file
