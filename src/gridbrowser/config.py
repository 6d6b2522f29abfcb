"""Configuration management for gridbrowser."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import toml

from gridbrowser.ui.constants import DEFAULT_ITEMS_PER_PAGE, ITEMS_PER_PAGE_OPTIONS, SEARCH_DEBOUNCE_MS

ALLOWED_THEMES = ["textual-dark", "textual-light", "dracula", "nord", "gruvbox", "solarized-light"]
DEFAULT_THEME = "textual-dark"
CONFIG_FILE_PATH = Path.home() / ".gridbrowser.config"


@dataclass
class BrowserConfig:
    """Browser configuration settings."""

    data_file: Optional[str] = None
    theme: str = DEFAULT_THEME
    debounce_ms: int = SEARCH_DEBOUNCE_MS
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    items_per_page_options: list[int] = field(default_factory=lambda: list(ITEMS_PER_PAGE_OPTIONS))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if self.theme not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        if not isinstance(self.debounce_ms, int) or self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be a non-negative integer, got {self.debounce_ms!r}")

        if not self.items_per_page_options or any(
            not isinstance(size, int) or size <= 0 for size in self.items_per_page_options
        ):
            raise ValueError(f"items_per_page_options must be positive integers, got {self.items_per_page_options!r}")

        if self.items_per_page not in self.items_per_page_options:
            raise ValueError(
                f"items_per_page {self.items_per_page} must be one of "
                f"{', '.join(str(size) for size in self.items_per_page_options)}"
            )


def load_config(config_file_path: Optional[str] = None) -> BrowserConfig:
    """Load configuration from file."""
    if config_file_path:
        config_path = Path(config_file_path)
    else:
        config_path = CONFIG_FILE_PATH

    if not config_path.exists():
        return BrowserConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")

    # Extract only the fields that belong to BrowserConfig
    valid_fields = {field.name for field in BrowserConfig.__dataclass_fields__.values()}
    filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

    try:
        return BrowserConfig(**filtered_config)
    except ValueError as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def merge_config_with_cli_args(config: BrowserConfig, **cli_args) -> BrowserConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    # Start with config values
    merged_config = {}

    for field_name in BrowserConfig.__dataclass_fields__:
        merged_config[field_name] = getattr(config, field_name)

    # Override with CLI args where provided (not None)
    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return BrowserConfig(**merged_config)


def save_config(config: BrowserConfig, config_file_path: Optional[str] = None) -> Path:
    """Write configuration values that differ from the defaults."""
    config_path = Path(config_file_path) if config_file_path else CONFIG_FILE_PATH
    defaults = BrowserConfig()
    payload = {
        name: getattr(config, name)
        for name in BrowserConfig.__dataclass_fields__
        if getattr(config, name) != getattr(defaults, name) and getattr(config, name) is not None
    }
    with open(config_path, "w") as f:
        toml.dump(payload, f)
    return config_path
