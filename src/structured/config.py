"""Process-wide settings supplying defaults to tree traversal and rendering.

Settings can be built from a dictionary or loaded from a YAML or JSON file,
and individual fields can be overridden through environment variables of
the form ``STRUCTURED_<FIELD>`` (e.g. ``STRUCTURED_TRAVERSAL=bfs``).

Settings only provide defaults. Any argument passed explicitly to a tree
method takes precedence over the configured value.

Typical usage example:

    ```python
    from structured.config import load_settings, set_settings

    # settings.yaml:
    #   traversal: bfs
    #   string_delim: "  "
    #   dot_node_attr:
    #     shape: box
    set_settings(load_settings("settings.yaml"))
    ```
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from structured.exceptions import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)

ENV_PREFIX = "STRUCTURED_"

TRAVERSALS = ("dfs", "bfs")


@dataclass
class StructuredSettings:
    """Defaults used by Tree traversal, rendering and visualization.

    Attributes:
        traversal: Default search order for ``Tree.find_nodes``, "dfs" or "bfs".
        string_delim: Default indentation/delimiter for ``Tree.as_string``.
        multiline: Default multiline flag for ``Tree.as_string``.
        dot_graph_attr: Default graph attributes for ``Tree.build_dot``.
        dot_node_attr: Default node attributes for ``Tree.build_dot``.
    """

    traversal: str = "dfs"
    string_delim: str = " "
    multiline: bool = False
    dot_graph_attr: Dict[str, str] = field(default_factory=dict)
    dot_node_attr: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.traversal not in TRAVERSALS:
            raise ConfigurationError(
                f"Invalid traversal setting: {self.traversal!r}",
                context={"traversal": self.traversal, "allowed": list(TRAVERSALS)},
            )
        for name, expected in (("string_delim", str), ("multiline", bool)):
            if not isinstance(getattr(self, name), expected):
                raise ConfigurationError(
                    f"Setting '{name}' must be a {expected.__name__}",
                    context={"setting": name, "value": getattr(self, name)},
                )
        for name in ("dot_graph_attr", "dot_node_attr"):
            if not isinstance(getattr(self, name), dict):
                raise ConfigurationError(
                    f"Setting '{name}' must be a mapping",
                    context={"setting": name, "value": getattr(self, name)},
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructuredSettings":
        """Create settings from a dictionary, rejecting unknown keys.

        Args:
            data: Mapping of setting names to values.

        Returns:
            The constructed settings.

        Raises:
            ConfigurationError: If a key is not a known setting.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(unknown)}",
                context={"unknown": unknown, "known": sorted(known)},
            )
        return cls(**copy.deepcopy(data))

    def to_dict(self) -> Dict[str, Any]:
        """Export settings as a dictionary."""
        return {f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(self)}


def _parse_value(value: str) -> Any:
    """Parse an environment variable value to bool, int, float or str."""
    if value.lower() in ["true", "yes"]:
        return True
    elif value.lower() in ["false", "no"]:
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def _load_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path).resolve()

    if not path.exists():
        raise NotFoundError(f"Settings file not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported settings file format: {suffix}",
                context={"path": str(path)},
            )

    logger.debug("Loaded settings from %s", path)
    return data or {}


def env_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Collect setting overrides from the environment.

    Only scalar settings can be overridden; the variable name after the prefix
    is lowercased to form the setting name. Values for string settings are
    kept as given, others are parsed with ``_parse_value``.

    Args:
        prefix: Environment variable prefix.

    Returns:
        Mapping of setting names to parsed values.
    """
    scalar_fields = {
        f.name: f.type for f in fields(StructuredSettings) if not f.name.startswith("dot_")
    }
    overrides = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            name = key[len(prefix) :].lower()
            if name in scalar_fields:
                keep_raw = scalar_fields[name] in (str, "str")
                overrides[name] = value if keep_raw else _parse_value(value)
    if overrides:
        logger.debug("Applying environment overrides: %s", sorted(overrides))
    return overrides


def load_settings(
    source: Union[str, Path, Dict[str, Any], None] = None,
    use_env: bool = True,
) -> StructuredSettings:
    """Build settings from a dict or a YAML/JSON file plus environment overrides.

    Args:
        source: A settings dictionary, a path to a settings file, or None for
            defaults.
        use_env: If True, ``STRUCTURED_<FIELD>`` environment variables override
            values from the source.

    Returns:
        The loaded settings.

    Raises:
        NotFoundError: If the settings file does not exist.
        ConfigurationError: If the file format or any setting is invalid.
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, dict):
        data = copy.deepcopy(source)
    elif isinstance(source, (str, Path)):
        data = _load_file(source)
    else:
        raise ConfigurationError(f"Invalid settings source type: {type(source)}")

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Settings must be a mapping", context={"type": type(data).__name__}
        )

    if use_env:
        data.update(env_overrides())

    return StructuredSettings.from_dict(data)


_settings = StructuredSettings()


def get_settings() -> StructuredSettings:
    """Return the active process-wide settings."""
    return _settings


def set_settings(settings: StructuredSettings) -> StructuredSettings:
    """Replace the active settings, returning the previous ones."""
    global _settings
    previous = _settings
    _settings = settings
    return previous
