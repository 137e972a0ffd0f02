# checkers/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationWeights:
    piece_value: float = 100
    king_value: float = 150
    center_control: float = 10
    advancement: float = 5
    back_row_defense: float = 3
    mobility_bonus: float = 2


@dataclass
class SearchConfig:
    depth: int = 6
    evaluate_move_depth_reduction: int = 2
    precog_depth: int = 4          # predicted replies and precog scores
    top_moves_depth: int = 4
    iterative_max_depth: int = 10
    time_limit_ms: int = 2000


@dataclass
class EvalConfig:
    weights: EvaluationWeights = field(default_factory=EvaluationWeights)


@dataclass
class AnalyzerConfig:
    # score loss versus the engine's best move, in evaluation points (one man = 100)
    TH_EXCELLENT: int = 15
    TH_GOOD: int = 50
    TH_INACCURACY: int = 100
    TH_MISTAKE: int = 200
    # opponent capture moves needed for each threat level
    THREAT_MEDIUM: int = 1
    THREAT_HIGH: int = 3


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "checkers.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        cfg.apply(raw)
        return cfg

    def apply(self, raw: Dict[str, Any]) -> None:
        """Merge a parsed TOML document onto this config; unknown keys are ignored."""
        for k, v in raw.get("search", {}).items():
            if hasattr(self.search, k):
                setattr(self.search, k, v)
        for k, v in raw.get("analyzer", {}).items():
            if hasattr(self.analyzer, k):
                setattr(self.analyzer, k, v)
        weight_names = {f.name for f in fields(EvaluationWeights)}
        updates = {k: v for k, v in raw.get("eval", {}).items() if k in weight_names}
        if updates:
            self.eval.weights = replace(self.eval.weights, **updates)
        if "log_level" in raw:
            self.log_level = str(raw["log_level"]).upper()


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHECKERS_CONFIG_TOML", "checkers.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("CHECKERS_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning("Ignoring non-integer CHECKERS_SEARCH_DEPTH=%r", override_depth)
