from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

TRUTHY = {"1", "true", "yes", "on"}

ENV_PREFIX = "MOCKWRIGHT_"


@dataclass
class MockwrightConfig:
    """Session-wide switches.

    Args:
        detect_count_conflicts:    Reject count bounds that can never all be
                                   satisfied (e.g. ``times(2)`` plus
                                   ``times(5)``) when they are declared.
        warn_on_malformed_pattern: Log malformed regex patterns at WARNING
                                   instead of DEBUG. They never match either way.
    """

    detect_count_conflicts: bool = False
    warn_on_malformed_pattern: bool = False

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: bool | None
    ) -> MockwrightConfig:
        """Build a config from MOCKWRIGHT_* variables; explicit overrides win."""
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            override = overrides.get(f.name)
            if override is not None:
                values[f.name] = bool(override)
                continue
            raw = environ.get(ENV_PREFIX + f.name.upper(), "").strip().lower()
            if raw:
                values[f.name] = raw in TRUTHY
        return cls(**values)
