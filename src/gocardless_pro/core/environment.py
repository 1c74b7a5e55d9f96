"""
Layering of process environment, ``.env`` files and explicit overrides into the
flat string mapping that :class:`gocardless_pro.core.config.ClientConfig` reads.

Precedence, highest first: overrides, the base mapping (``os.environ`` by
default), then the ``.env`` file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple

__all__ = ["ENV_PREFIX", "ClientEnvironment", "build_environment", "load_env_file"]

ENV_PREFIX = "GOCARDLESS_"

_EXPORT = "export "
_QUOTES = ("'", '"')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _iter_assignments(text: str) -> Iterator[Tuple[str, str]]:
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(_EXPORT):
            line = line[len(_EXPORT):].lstrip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            continue
        yield key.strip(), _unquote(value.strip())


def _read_env_file(path: Path) -> Dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    return dict(_iter_assignments(text))


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the assignments in ``path`` into ``environ`` without replacing keys it
    already has, and return the merged result.
    """
    target: MutableMapping[str, str] = os.environ if environ is None else environ
    for key, value in _read_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def with_prefix(self, prefix: str = ENV_PREFIX) -> "ClientEnvironment":
        """Keep only the variables whose name starts with ``prefix``."""
        return ClientEnvironment(
            {key: value for key, value in self.variables.items() if key.startswith(prefix)}
        )


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Assemble a :class:`ClientEnvironment` from multiple sources.

    Pass ``env_file=None`` to skip file loading and ``base={}`` to ignore the
    process environment.
    """
    merged: Dict[str, str] = {}
    if env_file is not None:
        merged.update(_read_env_file(Path(env_file)))
    merged.update(os.environ if base is None else base)
    merged.update(overrides or {})
    return ClientEnvironment(variables=merged)
