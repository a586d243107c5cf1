"""
Simulation configuration and named presets.

A SimulationConfig carries everything needed to build a CA run and its
Intention-Space counterpart: rule, grid shape, seeding, the three override
knobs and the resolution precedence.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Optional, Tuple

from .core.field import DEFAULT_DENSITY, SeedPolicy
from .core.proposal import Category
from .core.resolution import DEFAULT_PRECEDENCE
from .core.rule_table import RULE_MAX, RULE_MIN
from .errors import ConfigurationError
from .sources.pattern import parse_patterns


@dataclass(frozen=True)
class SimulationConfig:
    """
    Complete configuration for one CA / IS simulation pair.

    Attributes:
        rule: Elementary CA rule number (0-255)
        size: Row width in cells
        steps: Total rows in the output grid, seed row included
        init: Seeding policy ("zero", "single" or "random")
        density: Live-cell probability for "random" seeding

        # Intention-Space knobs
        patterns: Neighborhood strings that trigger a pattern proposal
        inject_prob: Per-cell novelty injection probability
        reflection_hold: Consecutive live steps before a cell reflects
        precedence: Category names, highest priority first

        seed: Seed for every random stream of the run (None = nondeterministic)
        key: Short preset identifier, used in output file names
        title: Human-readable title
    """

    rule: int = 110
    size: int = 141
    steps: int = 120
    init: str = "single"
    density: float = DEFAULT_DENSITY

    patterns: Tuple[str, ...] = ()
    inject_prob: float = 0.0
    reflection_hold: int = 999

    precedence: Tuple[str, ...] = tuple(c.value for c in DEFAULT_PRECEDENCE)

    seed: Optional[int] = None
    key: str = "custom"
    title: str = "Custom"

    def __post_init__(self) -> None:
        """Normalise collection fields and validate."""
        object.__setattr__(self, "patterns", tuple(sorted(parse_patterns(self.patterns))))
        object.__setattr__(self, "precedence", tuple(Category.parse(c).value for c in self.precedence))
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters have valid types and ranges."""
        for name in ("rule", "size", "steps", "reflection_hold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        for name in ("density", "inject_prob"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"seed must be an integer or None, got {self.seed!r}")

        if not RULE_MIN <= self.rule <= RULE_MAX:
            raise ConfigurationError(f"rule must be in [0, 255], got {self.rule}")

        if self.size < 1:
            raise ConfigurationError(f"size must be >= 1, got {self.size}")

        if self.steps < 1:
            raise ConfigurationError(f"steps must be >= 1, got {self.steps}")

        SeedPolicy.parse(self.init)

        if not 0.0 <= self.density <= 1.0:
            raise ConfigurationError(f"density must be in [0, 1], got {self.density}")

        if not 0.0 <= self.inject_prob <= 1.0:
            raise ConfigurationError(f"inject_prob must be in [0, 1], got {self.inject_prob}")

        if self.reflection_hold < 1:
            raise ConfigurationError(f"reflection_hold must be >= 1, got {self.reflection_hold}")

        if len(set(self.precedence)) != len(self.precedence):
            raise ConfigurationError(f"precedence lists a category twice: {list(self.precedence)}")
        if Category.BASELINE.value not in self.precedence:
            raise ConfigurationError("precedence must include baseline")

    @property
    def seed_policy(self) -> SeedPolicy:
        return SeedPolicy.parse(self.init)

    @property
    def intention_disabled(self) -> bool:
        """True when no override source can ever fire during the run."""
        return (not self.patterns
                and self.inject_prob == 0.0
                and self.reflection_hold >= self.steps)

    def replace(self, **changes: Any) -> "SimulationConfig":
        """Copy with some fields changed (validated again)."""
        data = self.to_dict()
        data.update(changes)
        return SimulationConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        data = asdict(self)
        data["patterns"] = list(self.patterns)
        data["precedence"] = list(self.precedence)
        return data

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SimulationConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        data = {k: v for k, v in d.items() if k in known_fields}
        if "patterns" in data:
            data["patterns"] = tuple(data["patterns"])
        if "precedence" in data:
            data["precedence"] = tuple(data["precedence"])
        return cls(**data)

    @classmethod
    def from_args(cls, args: Any, base: Optional["SimulationConfig"] = None) -> "SimulationConfig":
        """Create config from an argparse namespace, overriding base where set."""
        overrides = {k: v for k, v in vars(args).items() if v is not None}
        if base is None:
            return cls.from_dict(overrides)
        return base.replace(**{k: v for k, v in overrides.items()
                                if k in {f.name for f in fields(cls)}})


# Class I-IV presets: CA rule plus IS knobs tuned per Wolfram class
PRESETS: Dict[str, SimulationConfig] = {
    "classI": SimulationConfig(
        key="classI",
        title="Class I: Convergence",
        rule=255,
        init="random",
        patterns=(),              # empty keeps the IS run a pure class I
        inject_prob=0.0,
        reflection_hold=999,
    ),
    "classII": SimulationConfig(
        key="classII",
        title="Class II: Periodic",
        rule=4,
        init="single",
        patterns=("101",),        # rare defect injector
        inject_prob=0.002,
        reflection_hold=6,
    ),
    "classIII": SimulationConfig(
        key="classIII",
        title="Class III: Chaotic",
        rule=30,
        init="random",
        patterns=("101", "010", "001"),
        inject_prob=0.02,
        reflection_hold=2,
    ),
    "classIV": SimulationConfig(
        key="classIV",
        title="Class IV: Emergent",
        rule=110,
        init="single",
        patterns=("101", "100"),
        inject_prob=0.01,
        reflection_hold=4,
    ),
    "rule33": SimulationConfig(
        key="rule33",
        title="Rule 33 pair",
        rule=33,
        init="single",
        patterns=("101", "100"),
        inject_prob=0.01,
        reflection_hold=3,
    ),
}

CLASS_PRESETS: List[str] = ["classI", "classII", "classIII", "classIV"]


def get_preset(key: str) -> SimulationConfig:
    """Look up a named preset.

    Raises:
        ConfigurationError: If key is not a known preset
    """
    try:
        return PRESETS[key]
    except KeyError:
        raise ConfigurationError(f"Unknown preset {key!r}; available: {sorted(PRESETS)}") from None
