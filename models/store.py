"""YAML store for the last imported dataset, mapping, and priorities."""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .dataset import Dataset
from .field_mapping import FieldMapping
from .priority import PriorityConfig

logger = logging.getLogger(__name__)

DATASET_KEY = "dataset"
MAPPING_KEY = "mapping"
PRIORITY_CONFIG_KEY = "priorityConfig"


def _read_store(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw store data; a missing or empty file is an empty store."""
    path = Path(filename)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_store(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _put(filename: Union[str, Path], key: str, value: Any) -> None:
    """Replace one logical key, leaving the others unchanged."""
    data = _read_store(filename)
    data[key] = value
    _write_store(filename, data)
    logger.debug("Saved %s to %s", key, filename)


def _dataset_to_dict(dataset: Dataset) -> Dict[str, Any]:
    """Serialize a Dataset to the YAML dict format (camelCase keys)."""
    return {
        "id": dataset.id,
        "importedAt": dataset.imported_at,
        "headers": list(dataset.headers),
        "rows": [dict(row) for row in dataset.rows],
        "mapping": dataset.mapping.to_dict(),
    }


def _dataset_from_dict(dct: Dict[str, Any]) -> Dataset:
    return Dataset(
        dct["id"],
        dct["importedAt"],
        dct.get("headers") or [],
        [
            {str(k): "" if v is None else str(v) for k, v in row.items()}
            for row in dct.get("rows") or []
        ],
        FieldMapping.from_dict(dct.get("mapping") or {}),
    )


def new_dataset(
    headers: List[str],
    rows: List[Dict[str, str]],
    mapping: FieldMapping,
) -> Dataset:
    """Create a dataset with a fresh id and a UTC import timestamp."""
    return Dataset(
        str(uuid.uuid4()),
        datetime.now(timezone.utc).isoformat(),
        headers,
        rows,
        mapping,
    )


def save_dataset(filename: Union[str, Path], dataset: Dataset) -> None:
    _put(filename, DATASET_KEY, _dataset_to_dict(dataset))


def load_dataset(filename: Union[str, Path]) -> Optional[Dataset]:
    """Load the stored dataset, or None if none was saved."""
    dct = _read_store(filename).get(DATASET_KEY)
    if not dct:
        return None
    return _dataset_from_dict(dct)


def save_mapping(filename: Union[str, Path], mapping: FieldMapping) -> None:
    _put(filename, MAPPING_KEY, mapping.to_dict())


def load_mapping(filename: Union[str, Path]) -> Optional[FieldMapping]:
    """Load the last confirmed mapping, or None if none was saved."""
    dct = _read_store(filename).get(MAPPING_KEY)
    if not dct:
        return None
    return FieldMapping.from_dict(dct)


def save_priority_config(filename: Union[str, Path], config: PriorityConfig) -> None:
    _put(filename, PRIORITY_CONFIG_KEY, config.to_dict())


def load_priority_config(filename: Union[str, Path]) -> PriorityConfig:
    """Load the priority keywords, falling back to the built-in defaults."""
    dct = _read_store(filename).get(PRIORITY_CONFIG_KEY)
    if not dct:
        return PriorityConfig.default()
    return PriorityConfig.from_dict(dct)
