"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml


FAILURE_POLICIES = ("fatal", "warn")


@dataclass(frozen=True)
class BoardConfig:
    """Play-field extent in pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class AvatarConfig:
    """Player avatar size and per-tick displacement."""
    radius: float
    speed: float


@dataclass(frozen=True)
class HazardConfig:
    """Falling bubble parameters."""
    radius: float
    spawn_interval: float  # Seconds between spawns
    speed_min: float
    speed_max: float


@dataclass(frozen=True)
class EdibleConfig:
    """Falling food parameters."""
    radius: float
    cap: int               # Max live edibles at once
    speed_min: float
    speed_max: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    increment: int


@dataclass(frozen=True)
class TimingConfig:
    """Delta-time handling for velocity application."""
    fixed_tick: bool
    reference_tick_rate: float

    @property
    def tick_seconds(self) -> float:
        """Duration of one reference tick."""
        return 1.0 / self.reference_tick_rate


@dataclass(frozen=True)
class MenuConfig:
    """Menu layout (play button rectangle)."""
    play_button_x: float
    play_button_y: float
    play_button_width: float
    play_button_height: float

    @property
    def play_button(self) -> Tuple[float, float, float, float]:
        return (
            self.play_button_x,
            self.play_button_y,
            self.play_button_width,
            self.play_button_height,
        )


@dataclass(frozen=True)
class RulesConfig:
    """Active rule profile."""
    profile: str
    start_in_menu: bool
    neglect_loss: bool
    lethal_hazards: bool


@dataclass(frozen=True)
class AssetsConfig:
    """Asset file names and the failure policy applied when loading them."""
    base_dir: str
    background: Optional[str]
    avatar_sprite: Optional[str]
    font: Optional[str]
    font_size: int
    music: Optional[str]
    music_volume: float
    on_failure: str
    optional: Tuple[str, ...]

    def path_for(self, filename: str) -> Path:
        return Path(self.base_dir) / filename

    def is_optional(self, name: str) -> bool:
        return name in self.optional


@dataclass(frozen=True)
class ObservationConfig:
    """Agent environment parameters."""
    max_hazards: int
    max_episode_ticks: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    avatar: AvatarConfig
    hazard: HazardConfig
    edible: EdibleConfig
    scoring: ScoringConfig
    timing: TimingConfig
    menu: MenuConfig
    rules: RulesConfig
    assets: AssetsConfig
    observation: ObservationConfig
    profiles: Tuple[str, ...] = ()

    @property
    def center(self) -> Tuple[float, float]:
        """Centre of the play-field."""
        return (self.board.width / 2, self.board.height / 2)


def _parse_rules(raw: dict, profile: Optional[str]) -> Tuple[RulesConfig, Dict[str, dict]]:
    """Resolve the selected rule profile."""
    profiles = raw.get("profiles", {})
    if not profiles:
        raise ValueError("Config must define at least one entry under 'profiles'")

    name = profile or raw.get("rules", {}).get("profile")
    if name is None:
        name = next(iter(profiles))
    if name not in profiles:
        raise ValueError(
            f"Unknown rule profile '{name}', expected one of {sorted(profiles)}"
        )

    data = profiles[name] or {}
    rules = RulesConfig(
        profile=str(name),
        start_in_menu=bool(data.get("start_in_menu", True)),
        neglect_loss=bool(data.get("neglect_loss", False)),
        lethal_hazards=bool(data.get("lethal_hazards", True)),
    )
    return rules, profiles


def _parse_play_button(menu_data: dict, board: BoardConfig) -> MenuConfig:
    """Parse [x, y, w, h]; default is a 200x50 button just above centre."""
    button = menu_data.get("play_button")
    if button is None:
        button = [board.width / 2 - 100, board.height / 2 - 50, 200, 50]
    if len(button) != 4:
        raise ValueError(f"play_button must have 4 values [x, y, w, h], got {button}")
    return MenuConfig(
        play_button_x=float(button[0]),
        play_button_y=float(button[1]),
        play_button_width=float(button[2]),
        play_button_height=float(button[3]),
    )


def _resolve_base_dir(base_dir: str, config_path: Path) -> str:
    """Asset paths are relative to the config file unless absolute."""
    path = Path(base_dir)
    if not path.is_absolute():
        path = (config_path.parent / path).resolve()
    return str(path)


def _validate_range(name: str, low: float, high: float) -> None:
    if low < 0 or high < low:
        raise ValueError(f"{name} speed range must satisfy 0 <= min <= max, got [{low}, {high}]")


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.width <= 0 or board.height <= 0:
        raise ValueError(f"Board must have positive size, got {board.width}x{board.height}")

    for name, radius in (
        ("avatar", config.avatar.radius),
        ("hazard", config.hazard.radius),
        ("edible", config.edible.radius),
    ):
        if radius <= 0:
            raise ValueError(f"{name} radius must be positive, got {radius}")

    if 2 * config.avatar.radius > min(board.width, board.height):
        raise ValueError("Avatar does not fit inside the board")

    if config.avatar.speed < 0:
        raise ValueError(f"Avatar speed must be non-negative, got {config.avatar.speed}")

    _validate_range("hazard", config.hazard.speed_min, config.hazard.speed_max)
    _validate_range("edible", config.edible.speed_min, config.edible.speed_max)

    if config.hazard.spawn_interval <= 0:
        raise ValueError(
            f"hazard.spawn_interval must be positive, got {config.hazard.spawn_interval}"
        )

    if config.edible.cap < 0:
        raise ValueError(f"edible cap must be non-negative, got {config.edible.cap}")

    if config.scoring.increment < 0:
        raise ValueError(f"scoring.increment must be non-negative, got {config.scoring.increment}")

    if config.timing.reference_tick_rate <= 0:
        raise ValueError("timing.reference_tick_rate must be positive")

    x, y, w, h = config.menu.play_button
    if w <= 0 or h <= 0 or x < 0 or y < 0 or x + w > board.width or y + h > board.height:
        raise ValueError(f"play_button {config.menu.play_button} must lie inside the board")

    if config.assets.on_failure not in FAILURE_POLICIES:
        raise ValueError(
            f"assets.on_failure must be one of {FAILURE_POLICIES}, got '{config.assets.on_failure}'"
        )

    if config.observation.max_hazards <= 0:
        raise ValueError("observation.max_hazards must be positive")


def load_config(
    config_path: Optional[str] = None,
    profile: Optional[str] = None
) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.
        profile: Rule profile name. If None, uses rules.profile from the file.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    avatar_data = raw["avatar"]
    avatar = AvatarConfig(
        radius=float(avatar_data["radius"]),
        speed=float(avatar_data["speed"])
    )

    hazard_data = raw["hazard"]
    hazard = HazardConfig(
        radius=float(hazard_data["radius"]),
        spawn_interval=float(hazard_data.get("spawn_interval", 1.0)),
        speed_min=float(hazard_data["speed_min"]),
        speed_max=float(hazard_data["speed_max"])
    )

    rules, profiles = _parse_rules(raw, profile)

    # Profiles may override the edible cap
    edible_data = raw["edible"]
    edible_cap = (profiles[rules.profile] or {}).get("edible_cap", edible_data["cap"])
    edible = EdibleConfig(
        radius=float(edible_data["radius"]),
        cap=int(edible_cap),
        speed_min=float(edible_data["speed_min"]),
        speed_max=float(edible_data["speed_max"])
    )

    scoring = ScoringConfig(
        increment=int(raw.get("scoring", {}).get("increment", 10))
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        fixed_tick=bool(timing_data.get("fixed_tick", False)),
        reference_tick_rate=float(timing_data.get("reference_tick_rate", 240))
    )

    menu = _parse_play_button(raw.get("menu", {}), board)

    assets_data = raw.get("assets", {})
    assets = AssetsConfig(
        base_dir=_resolve_base_dir(str(assets_data.get("base_dir", "assets")), config_path),
        background=assets_data.get("background"),
        avatar_sprite=assets_data.get("avatar_sprite"),
        font=assets_data.get("font"),
        font_size=int(assets_data.get("font_size", 24)),
        music=assets_data.get("music"),
        music_volume=float(assets_data.get("music_volume", 50)),
        on_failure=str(assets_data.get("on_failure", "fatal")),
        optional=tuple(str(name) for name in assets_data.get("optional", ("music",)))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_hazards=int(obs_data.get("max_hazards", 32)),
        max_episode_ticks=int(obs_data.get("max_episode_ticks", 20000)),
        image_width=int(obs_data.get("image_width", 480)),
        image_height=int(obs_data.get("image_height", 270))
    )

    config = GameConfig(
        board=board,
        avatar=avatar,
        hazard=hazard,
        edible=edible,
        scoring=scoring,
        timing=timing,
        menu=menu,
        rules=rules,
        assets=assets,
        observation=observation,
        profiles=tuple(profiles)
    )

    _validate_config(config)
    return config


def with_asset_policy(config: GameConfig, on_failure: str) -> GameConfig:
    """Return a copy of config with a different asset failure policy."""
    updated = replace(config, assets=replace(config.assets, on_failure=on_failure))
    _validate_config(updated)
    return updated


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(
    config_path: Optional[str] = None,
    profile: Optional[str] = None
) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path, profile)
    return _cached_config
