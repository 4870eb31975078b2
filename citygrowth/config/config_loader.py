"""Layered YAML settings for the CityGrowth generators.

Settings come from three layers, each merged over the previous one: the
bundled ``default.yaml``, an optional user file, and an in-memory overrides
mapping. Values are read back with dotted paths such as
``citygen.road.segment_count_limit``.
"""
import copy
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default.yaml'


def _load_yaml(path: Path, label: str) -> dict:
    """Read one YAML layer; an empty file yields an empty mapping."""
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except (PermissionError, IOError) as e:
        raise PermissionError(f'Cannot read {label} CityGrowth config: {path}') from e


class Config:
    """Settings shared by the road, building and route generators.

    Attributes:
        config: The merged settings tree.
    """
    def __init__(self, path: str = None, overrides: dict = None):
        """Build the settings tree.

        Args:
            path: Optional YAML file whose values replace the bundled defaults.
            overrides: Optional nested mapping applied after the file. It is
                copied, so later edits to the tree never reach the caller.

        Raises:
            FileNotFoundError: If ``path`` is given but does not exist.
            PermissionError: If a layer exists but cannot be read.
        """
        self.config = _load_yaml(DEFAULT_CONFIG_PATH, 'bundled')

        if path:
            user_path = Path(path)
            if not user_path.exists():
                raise FileNotFoundError(f'CityGrowth config file does not exist: {user_path}')
            if user_path.resolve() != DEFAULT_CONFIG_PATH.resolve():
                self._merge_dicts(self.config, _load_yaml(user_path, 'user'))

        if overrides:
            self._merge_dicts(self.config, copy.deepcopy(overrides))

    def get(self, key_path: str, default=None):
        """Look up a setting by dotted path.

        Args:
            key_path: Path such as ``'citygen.traffic.highway.max_speed'``.
            default: Returned when the path is absent. ``None`` means the
                setting is required.

        Returns:
            The value stored at ``key_path``, which may be a nested mapping.

        Raises:
            ValueError: If the path is absent and no default was given.
        """
        node = self.config
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                if default is not None:
                    return default
                raise ValueError(f'Missing CityGrowth setting: {key_path}')
            node = node[key]
        return node

    def __getitem__(self, key_path: str):
        """Required lookup, e.g. ``config['citygen.road.road_snap_distance']``."""
        return self.get(key_path)

    def _merge_dicts(self, base, updates):
        """Merge ``updates`` into ``base`` in place, descending into shared mappings."""
        for key, value in updates.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge_dicts(base[key], value)
            else:
                base[key] = value
