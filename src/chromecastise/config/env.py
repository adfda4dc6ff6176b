"""``CHROMECASTISE_*`` environment overrides."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")

ENV_PREFIX = "CHROMECASTISE_"


class EnvReader:
    """Typed access to ``CHROMECASTISE_*`` variables.

    Keys are given without the prefix: ``get_int("THREADS")`` reads
    ``CHROMECASTISE_THREADS``. Blank values count as unset. A value that
    cannot be converted raises ValueError naming the variable, so a typo in
    the environment is reported like a bad config file value.

    Tests pass their own mapping instead of touching os.environ::

        EnvReader(env={"CHROMECASTISE_THREADS": "4"}).get_int("THREADS")  # 4
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self._prefix = prefix

    def name(self, key: str) -> str:
        """Full variable name for ``key``."""
        return f"{self._prefix}{key}"

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self._env.get(self.name(key), "").strip()
        return value or default

    def get_int(self, key: str, default: int | None = None) -> int | None:
        return self._convert(key, int, "an integer", default)

    def get_float(self, key: str, default: float | None = None) -> float | None:
        return self._convert(key, float, "a number", default)

    def get_path(self, key: str, default: Path | None = None) -> Path | None:
        """Path with ``~`` expanded. Existence is checked by the consumer."""
        value = self.get_str(key)
        return Path(value).expanduser() if value else default

    def _convert(
        self, key: str, convert: Callable[[str], T], kind: str, default: T | None
    ) -> T | None:
        value = self.get_str(key)
        if value is None:
            return default
        try:
            return convert(value)
        except ValueError:
            raise ValueError(
                f"{self.name(key)} must be {kind}, got {value!r}"
            ) from None
