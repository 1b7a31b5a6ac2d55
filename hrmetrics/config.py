"""Engine configuration and environment setup."""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

type ConfigDict = dict[str, str | int | bool | list]

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class ScarcityBand:
    """Skills held by at most ``threshold`` active employees get ``color``."""

    threshold: float
    color: str


DEFAULT_SCARCITY_BANDS = (
    ScarcityBand(threshold=5, color="#ef4444"),
    ScarcityBand(threshold=35, color="#f97316"),
    ScarcityBand(threshold=65, color="#84cc16"),
    ScarcityBand(threshold=float("inf"), color="#16a34a"),
)

DEFAULT_CRITICAL_ROLES = ("Chief Executive Officer", "VP of Engineering", "VP of Sales")


@dataclass(frozen=True)
class OutputConfig:
    directory: str
    format: str


@dataclass(frozen=True)
class EngineConfig:
    output: OutputConfig
    log_level: str
    default_period: str = "12m"
    at_risk_threshold: int = 3
    new_hire_months: int = 6
    scarcity_bands: tuple[ScarcityBand, ...] = DEFAULT_SCARCITY_BANDS
    critical_roles: tuple[str, ...] = DEFAULT_CRITICAL_ROLES
    domains: list[str] = field(
        default_factory=lambda: ["workforce", "talent", "skills", "attendance", "recruiting"]
    )


def load_engine_config(env: str = "production", root: Path = PROJECT_ROOT) -> EngineConfig:
    match env:
        case "production":
            output = OutputConfig(directory="output", format="json")
            log_level = "INFO"
        case "staging":
            output = OutputConfig(directory="output/staging", format="json")
            log_level = "INFO"
        case "development":
            output = OutputConfig(directory="output/dev", format="json")
            log_level = "DEBUG"
        case other:
            raise ValueError(f"Unknown environment: {other}")

    config = EngineConfig(output=output, log_level=log_level)
    return apply_overrides(config, get_env_config(root))


def _parse_bands(raw: list) -> tuple[ScarcityBand, ...]:
    bands = []
    for entry in raw:
        match entry:
            case {"threshold": threshold, "color": color}:
                bands.append(ScarcityBand(threshold=float(threshold), color=str(color)))
            case [threshold, color]:
                bands.append(ScarcityBand(threshold=float(threshold), color=str(color)))
            case other:
                raise ValueError(f"Invalid scarcity band: {other!r}")
    return tuple(sorted(bands, key=lambda b: b.threshold))


def apply_overrides(config: EngineConfig, overrides: ConfigDict) -> EngineConfig:
    """Layer file-based overrides on top of the per-environment defaults."""
    changes = {}
    for key, value in overrides.items():
        match key:
            case "default_period" | "log_level":
                changes[key] = str(value)
            case "at_risk_threshold" | "new_hire_months":
                changes[key] = int(value)
            case "critical_roles":
                changes[key] = tuple(str(role) for role in value)
            case "scarcity_bands":
                changes[key] = _parse_bands(value)
            case "domains":
                changes[key] = list(value)
            case "output":
                changes[key] = OutputConfig(
                    directory=str(value.get("directory", config.output.directory)),
                    format=str(value.get("format", config.output.format)),
                )
            case _:
                continue
    return replace(config, **changes)


def get_env_config(root: Path = PROJECT_ROOT) -> ConfigDict:
    """Read engine overrides from hrmetrics.yaml, else pyproject.toml [tool.hrmetrics]."""
    yaml_path = root / "hrmetrics.yaml"
    if yaml_path.exists():
        with open(yaml_path) as f:
            return yaml.safe_load(f) or {}

    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("hrmetrics", {})
