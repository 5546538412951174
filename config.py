"""
Central configuration for board, engine, UI and logging settings.
Pydantic models give type-safe, validated configuration.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tictactoe.types import SearchConfig, Strategy, Symbols


class BoardSettings(BaseModel):
    """Board geometry and the characters used to display sides."""

    size: int = Field(default=3, ge=3, description="Side length N of the N x N grid")
    player_symbol: str = Field(default="x", min_length=1, max_length=1, description="Human player's mark")
    automated_symbol: str = Field(default="o", min_length=1, max_length=1, description="Automated side's mark")
    empty_symbol: str = Field(default=" ", min_length=1, max_length=1, description="Empty cell mark")
    human_first: bool = Field(default=True, description="Human opens every game")

    @model_validator(mode="after")
    def validate_distinct_symbols(self) -> "BoardSettings":
        if len({self.player_symbol, self.automated_symbol, self.empty_symbol}) != 3:
            raise ValueError("player, automated and empty symbols must be distinct")
        return self

    def symbols(self) -> Symbols:
        return Symbols(self.player_symbol, self.automated_symbol, self.empty_symbol)


class EngineSettings(BaseModel):
    """Move selection settings."""

    strategy: Strategy = Field(default=Strategy.MINIMAX, description="random or minimax")
    pruning: bool = Field(default=True, description="Alpha-beta pruning")
    max_depth: Optional[int] = Field(default=None, ge=1, description="Search depth limit, None for unlimited")
    parallel: bool = Field(default=False, description="Search root moves in worker processes")
    workers: int = Field(default=2, ge=1, le=64, description="Worker processes for parallel search")
    seed: Optional[int] = Field(default=None, description="Seed for the random strategy")

    @field_validator("max_depth", mode="before")
    @classmethod
    def validate_max_depth(cls, v):
        if v in (None, "", "none", "None", 0, "0"):
            return None
        return int(v)

    def to_search_config(self) -> SearchConfig:
        return SearchConfig(
            strategy=self.strategy,
            pruning=self.pruning,
            max_depth=self.max_depth,
            parallel=self.parallel,
            workers=self.workers,
        )


class UISettings(BaseModel):
    """Terminal display settings."""

    show_indices: bool = Field(default=True, description="Show row and column indices")

    @field_validator("show_indices", mode="before")
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="tictactoe.log", description="Log file path")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class TicTacToeConfig(BaseModel):
    """Main configuration model."""

    board: BoardSettings = Field(default_factory=BoardSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Metadata
    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> "TicTacToeConfig":
        """Create configuration from environment variables."""
        return cls(
            board=BoardSettings(
                size=int(os.getenv("TICTACTOE_SIZE", "3")),
                human_first=os.getenv("TICTACTOE_HUMAN_FIRST", "true").lower() == "true",
            ),
            engine=EngineSettings(
                strategy=os.getenv("TICTACTOE_STRATEGY", "minimax").lower(),
                pruning=os.getenv("TICTACTOE_PRUNING", "true").lower() == "true",
                max_depth=os.getenv("TICTACTOE_MAX_DEPTH"),
                parallel=os.getenv("TICTACTOE_PARALLEL", "false").lower() == "true",
                workers=int(os.getenv("TICTACTOE_WORKERS", "2")),
                seed=os.getenv("TICTACTOE_SEED"),
            ),
            logging=LoggingSettings(
                log_level=os.getenv("TICTACTOE_LOG_LEVEL", "INFO"),
                log_to_file=os.getenv("TICTACTOE_LOG_FILE", "false").lower() == "true",
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict["config_file"] = filepath

        with open(filepath, "w") as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> "TicTacToeConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)

        return cls(
            board=BoardSettings(**data.get("board", {})),
            engine=EngineSettings(**data.get("engine", {})),
            ui=UISettings(**data.get("ui", {})),
            logging=LoggingSettings(**data.get("logging", {})),
            version=data.get("version", "1.0.0"),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary, validating each changed section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[TicTacToeConfig] = None


def get_config() -> TicTacToeConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = TicTacToeConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> TicTacToeConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = TicTacToeConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


# Convenience functions for common configuration access
def get_board_settings() -> BoardSettings:
    return get_config().board


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once from the logging settings (TICTACTOE_LOG_LEVEL)."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=settings.log_file_path if settings.log_to_file else None,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
