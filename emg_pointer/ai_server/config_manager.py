import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

from ..utils.logging_cfg import get_logger

log = get_logger(__name__)

# Paths - relative to PROJECT ROOT
# emg_pointer/ai_server/config_manager.py -> ../../
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "config" / "ai_server_config.json"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = "http://127.0.0.1:8000"
    predict_path: str = "/batch_predict_windowed"
    clear_session_path: str = "/clear_session"
    batch_size: int = 10             # samples collected before a window is sent
    memory_size: int = 6             # predictions kept for majority voting
    recent_predictions: int = 3      # predictions taken from each response
    buffering_log_every: int = 5
    request_timeout: float = 10.0    # seconds
    session_prefix: str = "emg_pointer"
    log_file: Optional[str] = None

    def __post_init__(self):
        for name in ("batch_size", "memory_size", "recent_predictions", "buffering_log_every"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")

    @property
    def predict_url(self) -> str:
        return self.base_url.rstrip("/") + self.predict_path

    @property
    def clear_session_url(self) -> str:
        return self.base_url.rstrip("/") + self.clear_session_path

    def to_dict(self) -> dict:
        return asdict(self)


def _known_keys(cfg: dict) -> dict:
    names = {f.name for f in fields(ClientConfig)}
    unknown = sorted(set(cfg) - names)
    if unknown:
        log.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return {k: v for k, v in cfg.items() if k in names}


def load_config(path: Optional[Union[str, Path]] = None, **overrides) -> ClientConfig:
    """
    Build a ClientConfig from defaults, the JSON config file, then overrides.

    A missing or unreadable file, or one holding invalid values, falls back
    to the defaults. Invalid overrides raise ValueError.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    file_values = {}

    if config_path.exists():
        try:
            with open(config_path) as f:
                cfg = json.load(f)
            if not isinstance(cfg, dict):
                raise ValueError("top-level JSON value must be an object")
            file_values = _known_keys(cfg)
        except (OSError, ValueError) as e:
            log.warning("Error loading config %s: %s", config_path, e)
    else:
        log.info("Config file not found at %s, using defaults", config_path)

    override_values = {k: v for k, v in _known_keys(overrides).items() if v is not None}

    try:
        return ClientConfig(**{**file_values, **override_values})
    except (TypeError, ValueError) as e:
        if not file_values:
            raise
        log.warning("Invalid values in %s (%s), using defaults", config_path, e)
        return ClientConfig(**override_values)


def save_config(config: ClientConfig, path: Optional[Union[str, Path]] = None) -> bool:
    """Save config to disk as JSON."""
    config_path = Path(path) if path is not None else CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        log.info("Config saved to %s", config_path)
        return True
    except OSError as e:
        log.warning("Error saving config to %s: %s", config_path, e)
        return False
