import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
import yaml
from blinker import Signal
from platformdirs import user_config_dir


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("cairoaffine"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def parse_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def getflag(name, default=False):
    default = "true" if default else "false"
    return parse_flag(os.environ.get(name, default))


class Config:
    def __init__(self):
        # Reject every singular matrix, not just the all-zero one
        self.strict_singular: bool = getflag("CAIROAFFINE_STRICT")
        self.singular_tolerance: float = 1e-6
        self.changed = Signal()

    def set_strict_singular(self, strict: bool):
        if self.strict_singular == strict:
            return
        self.strict_singular = strict
        self.changed.send(self)

    def set_singular_tolerance(self, tolerance: float):
        if tolerance < 0:
            raise ValueError("Tolerance must not be negative")
        if self.singular_tolerance == tolerance:
            return
        self.singular_tolerance = tolerance
        self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strict_singular": self.strict_singular,
            "singular_tolerance": self.singular_tolerance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        config = cls()
        config.set_strict_singular(
            parse_flag(data.get("strict_singular", config.strict_singular))
        )
        config.set_singular_tolerance(
            float(data.get("singular_tolerance", config.singular_tolerance))
        )
        return config


class ConfigManager:
    def __init__(self, filepath: Path):
        self.filepath = filepath
        self.config: Config = Config()
        self.load_config()

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)

    def load_config(self) -> Config:
        if not self.filepath.exists():
            self.config = Config()
            return self.config

        with open(self.filepath, "r") as f:
            data = yaml.safe_load(f)
        if not data:
            self.config = Config()
        else:
            self.config = Config.from_dict(data)
        return self.config


# Until initialize_config() runs, a default config is active. No file
# is read at import time.
config_mgr: Optional[ConfigManager] = None
config = Config()


def initialize_config(filepath: Path = CONFIG_FILE) -> Config:
    """
    Loads the configuration file. Safe to call more than once; only the
    first call reads the file.
    """
    global config_mgr, config

    if config_mgr is not None:
        return config

    logger.info(f"Loading configuration from {filepath}")
    config_mgr = ConfigManager(filepath)
    config = config_mgr.config
    logger.info(
        f"Config loaded. strict_singular={config.strict_singular}, "
        f"singular_tolerance={config.singular_tolerance}"
    )
    return config


def get_config() -> Config:
    return config
