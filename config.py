"""Configuration management for Potti.

Reads configuration from ~/.config/potti.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    export_dir: Path
    mappings_file: Path
    currency: str = "EUR"
    contributor_count: int = 2
    pattern_limit: int = 30

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "potti"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            export_dir=base_dir / "exports",
            mappings_file=base_dir / "groupings.json",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "potti.toml"


def load_config(config_path: Path = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional override of the config file location.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "potti"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    export_config = data.get("export", {})
    export_dir = Path(export_config.get("export_dir", base_dir / "exports"))
    mappings_file = Path(
        export_config.get("mappings_file", base_dir / "groupings.json")
    )
    currency = export_config.get("currency", "EUR")

    analysis_config = data.get("analysis", {})
    contributor_count = int(analysis_config.get("contributor_count", 2))
    pattern_limit = int(analysis_config.get("pattern_limit", 30))

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        export_dir=export_dir,
        mappings_file=mappings_file,
        currency=currency,
        contributor_count=contributor_count,
        pattern_limit=pattern_limit,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination of the TOML file.
    """
    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "export": {
            "export_dir": str(config.export_dir),
            "mappings_file": str(config.mappings_file),
            "currency": config.currency,
        },
        "analysis": {
            "contributor_count": config.contributor_count,
            "pattern_limit": config.pattern_limit,
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
