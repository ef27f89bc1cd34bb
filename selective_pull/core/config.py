"""Typed configuration loaded from the snapcraft build environment.

snapcraft exports the project name and the part source directory to
scriptlets. They are read once here and handed down explicitly; nothing
below the CLI consults `os.environ`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result

__all__ = [
    "CONTROLLER_ENV",
    "ControllerFlavor",
    "ConfigError",
    "SNAP_NAME_ENV",
    "SOURCE_DIR_ENV",
    "SelectorConfig",
    "load_config",
]

SNAP_NAME_ENV = "SNAPCRAFT_PROJECT_NAME"
SOURCE_DIR_ENV = "SNAPCRAFT_PART_SRC"
CONTROLLER_ENV = "SELECTIVE_PULL_CONTROLLER"

type ControllerFlavor = Literal["snapcraftctl", "craftctl"]

_CONTROLLERS: tuple[ControllerFlavor, ...] = ("snapcraftctl", "craftctl")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the environment holds an unusable value."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorConfig:
    """Configuration for one selective-pull run.

    Attributes:
        snap_name: Name queried in the snap store. May be None; it is only
            required once the decision reaches the store lookup.
        source_dir: Directory holding the git checkout of the part.
        controller: Build controller command family.
    """

    source_dir: Path
    snap_name: str | None = None
    controller: ControllerFlavor = "snapcraftctl"


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def load_config(env: Mapping[str, str], *, cwd: Path) -> Result[SelectorConfig, ConfigError]:
    """Build a SelectorConfig from environment variables.

    Args:
        env: Environment mapping (usually `os.environ`).
        cwd: Fallback source directory when SNAPCRAFT_PART_SRC is unset.

    Returns:
        Ok(SelectorConfig), or Err(ConfigError) for an unknown controller
        or a source directory that does not exist.
    """
    controller = _normalize_empty(env.get(CONTROLLER_ENV)) or "snapcraftctl"
    if controller not in _CONTROLLERS:
        return Err(
            ConfigError(
                f"unsupported {CONTROLLER_ENV}: {controller}",
                hint=f"Expected one of: {', '.join(_CONTROLLERS)}",
            )
        )

    raw_source = _normalize_empty(env.get(SOURCE_DIR_ENV))
    source_dir = Path(raw_source).expanduser() if raw_source else cwd
    if not source_dir.is_dir():
        return Err(
            ConfigError(
                f"source directory does not exist: {source_dir}",
                hint=f"Check {SOURCE_DIR_ENV}",
            )
        )

    return Ok(
        SelectorConfig(
            source_dir=source_dir,
            snap_name=_normalize_empty(env.get(SNAP_NAME_ENV)),
            controller="craftctl" if controller == "craftctl" else "snapcraftctl",
        )
    )
