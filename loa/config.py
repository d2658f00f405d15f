# loa/config.py
from dataclasses import dataclass, field
from typing import Optional, Tuple
import os
import tomllib  # python >=3.11

from loguru import logger

# Score bands (points). The heuristic picks one entry of a band at random.
ZONE1_BAND = (1, 2, 3, 4, 5)
ZONE2_BAND = (20, 25, 30, 35, 40)
ZONE3_BAND = (90, 95, 100, 105, 110)

@dataclass
class SearchConfig:
    depth: int = 2
    seed: Optional[int] = None  # None seeds the random source from the OS

@dataclass
class EvalConfig:
    winning_value: int = 2**31 - 21
    zone1_band: Tuple[int, ...] = ZONE1_BAND
    zone2_band: Tuple[int, ...] = ZONE2_BAND
    zone3_band: Tuple[int, ...] = ZONE3_BAND
    band_size: int = 5               # bound passed to rand_int when picking from a band
    edge_penalty: int = 100          # piece on the edge of its scoring axis
    small_region_penalty: int = 100  # largest region below `lower` of all pieces
    fragment_penalty: int = 100      # more than `max_regions` regions
    max_regions: int = 3
    lower: float = 0.4
    upper: float = 0.8
    medium: int = 50
    momentum_bound: int = 11         # rand_int(momentum_bound) >= momentum_threshold -> full bonus
    momentum_threshold: int = 5

@dataclass
class BoardConfig:
    move_limit: int = 60  # plies

@dataclass
class UIConfig:
    machine_side: str = "white"  # white | black | both | none

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    board: BoardConfig = field(default_factory=BoardConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "board", "ui"):
            if section not in raw:
                continue
            target = getattr(cfg, section)
            for k, v in raw[section].items():
                if not hasattr(target, k):
                    logger.warning(f"Unknown config key [{section}].{k} in {path}")
                    continue
                if isinstance(v, list):
                    v = tuple(v)
                setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("LOA_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("LOA_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning(f"Ignoring non-integer LOA_SEARCH_DEPTH={override_depth!r}")
