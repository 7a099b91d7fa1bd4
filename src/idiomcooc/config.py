"""
Configuration file support for co-occurrence mining runs.

Supports YAML and JSON config files mapping onto :class:`MiningConfig`.
"""

import json
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class MiningConfig:
    """
    Settings for a batch accumulation run.

    Attributes:
        prune_threshold: Joint cells with count <= this are pruned
        prune_every: Prune after every N observations (0 disables
            pruning during ingestion)
        final_prune: Prune once more after the last observation
        log_every: Log progress every N observations (0 disables)
        top_k: Keep only the K best associations when ranking (None = all)
        min_count: Minimum joint count for a pair to be ranked
    """
    prune_threshold: int = 1
    prune_every: int = 0
    final_prune: bool = False
    log_every: int = 10000
    top_k: Optional[int] = None
    min_count: int = 1

    def __post_init__(self):
        for name in ('prune_threshold', 'prune_every', 'log_every', 'min_count'):
            value = getattr(self, name)
            if not _is_integer(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
            setattr(self, name, int(value))
        if self.top_k is not None:
            if not _is_integer(self.top_k) or self.top_k <= 0:
                raise ValueError(f"top_k must be a positive integer or None, got {self.top_k!r}")
            self.top_k = int(self.top_k)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MiningConfig":
        """
        Build a config from a mapping, rejecting unknown keys.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(
                f"Unknown mining config keys: {unknown}. Valid keys: {sorted(known)}"
            )
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Read mining settings from a YAML or JSON file.

    The file holds one flat mapping of :class:`MiningConfig` fields; pass the
    result to :meth:`MiningConfig.from_dict` to validate it.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        Dictionary of raw settings; empty for an empty YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the suffix is unsupported, the file does not parse,
            or its top level is not a mapping

    Example (illustrative, needs a ``mining.yaml`` on disk)::

        config = MiningConfig.from_dict(load_config(Path("mining.yaml")))
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Mining config not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix in ('.yaml', '.yml'):
        parse, parse_error = yaml.safe_load, yaml.YAMLError
    elif suffix == '.json':
        parse, parse_error = json.load, json.JSONDecodeError
    else:
        raise ValueError(
            f"Unsupported config format: {suffix} ({config_path}). "
            f"Use .yaml, .yml, or .json"
        )

    with open(config_path, 'r') as f:
        try:
            config = parse(f)
        except parse_error as e:
            kind = "YAML" if suffix != '.json' else "JSON"
            raise ValueError(f"Invalid {kind} in mining config {config_path}: {e}") from e

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError(
            f"Mining config {config_path} must contain a mapping of settings "
            f"at top level, got {type(config).__name__}"
        )

    return config
