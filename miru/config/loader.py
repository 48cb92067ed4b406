"""Read and write ~/.miru/config.json.

The file is camelCase JSON; the in-memory models are snake_case. Children of
``env`` maps are environment variable names and keep their spelling.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable

from miru.config.schema import Config

_VERBATIM_CHILDREN = frozenset({"env"})


def get_config_path() -> Path:
    return Path.home() / ".miru" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load the config file, or defaults (plus MIRU_* env overrides) when it is absent.

    Raises:
        ValueError: the file is not valid JSON, not an object, or fails validation.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("config file must be a JSON object")
        return Config.model_validate(convert_keys(data))
    except ValueError as e:
        raise ValueError(
            f"Failed to load config from {path}: {e}. "
            "Fix the file or remove it to regenerate defaults."
        ) from e


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write config as camelCase JSON, replacing the file atomically."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(convert_to_camel(config.model_dump()), indent=2, ensure_ascii=False) + "\n"

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, path)

    # Imported here: access imports this module.
    from miru.config.access import clear_config_cache

    clear_config_cache(config_path=path)


def _rename_keys(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, list):
        return [_rename_keys(item, rename) for item in data]
    if not isinstance(data, dict):
        return data
    out: dict[str, Any] = {}
    for key, value in data.items():
        new_key = rename(key)
        if new_key in _VERBATIM_CHILDREN and isinstance(value, dict):
            out[new_key] = dict(value)
        else:
            out[new_key] = _rename_keys(value, rename)
    return out


def convert_keys(data: Any) -> Any:
    """camelCase keys -> snake_case, recursively."""
    return _rename_keys(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """snake_case keys -> camelCase, recursively."""
    return _rename_keys(data, snake_to_camel)


def camel_to_snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() and i else c.lower() for i, c in enumerate(name))


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
