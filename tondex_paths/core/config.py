import json
import os
from pathlib import Path
from typing import Any

from tondex_paths.core.constants.stonfi import TX_DEADLINE

_CONFIG_ENV_KEYS = ("TONDEX_CONFIG_PATH", "TONDEX_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"
_DEFAULT_TONCENTER_URL = "https://toncenter.com/api/v2"


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except Exception:
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def get_toncenter_url() -> str:
    system = CONFIG.get("system", {})
    url = system.get("toncenter_url")
    if url:
        return str(url).strip()
    return _DEFAULT_TONCENTER_URL


def get_toncenter_api_key() -> str | None:
    system = CONFIG.get("system", {})
    api_key = system.get("toncenter_api_key")
    if api_key:
        return str(api_key).strip()
    return os.environ.get("TONCENTER_API_KEY")


def get_tx_deadline() -> int:
    value = CONFIG.get("stonfi", {}).get("tx_deadline")
    if value is None:
        return TX_DEADLINE
    return int(value)


def get_gas_overrides(revision: str, role: str) -> dict[str, Any]:
    """Partial gas table for one contract role of one revision, e.g. ``("v2_1", "router")``."""
    overrides = CONFIG.get("stonfi", {}).get("gas_overrides", {})
    return dict(overrides.get(revision, {}).get(role, {}))
