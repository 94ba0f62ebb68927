# src/container_finder/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for retrieving the paths the tool reads from.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed 'container_finder' package."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        """Returns the path of the bundled settings.json."""
        return PathUtils.get_package_root() / "settings.json"
