"""
Configuration model for jj-status.

The CLI constructs a Config instance and passes it down into the session
and adapter layers so behavior can be adjusted without relying on global
state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .errors import ConfigError

ENV_EXECUTABLE = "JJ_STATUS_EXECUTABLE"
ENV_DIFF_TOOL = "JJ_STATUS_DIFF_TOOL"
ENV_TIMEOUT = "JJ_STATUS_TIMEOUT"


@dataclass
class Config:
    """
    Top-level configuration for a jj-status session.

    jj_executable is resolved through PATH when it is a bare name.
    diff_tool is passed through verbatim to `jj diff --tool`.
    timeout bounds every jj invocation, in seconds.
    """

    jj_executable: str = "jj"
    diff_tool: str = "difft"
    timeout: Optional[float] = 30.0
    verbosity: int = 0
    expand: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "Config":
        """
        Build a Config from JJ_STATUS_* environment variables.

        Keyword overrides whose value is not None win over the
        environment.
        """

        env = os.environ if environ is None else environ
        config = cls()

        if env.get(ENV_EXECUTABLE):
            config.jj_executable = env[ENV_EXECUTABLE]
        if env.get(ENV_DIFF_TOOL):
            config.diff_tool = env[ENV_DIFF_TOOL]
        if env.get(ENV_TIMEOUT):
            try:
                config.timeout = float(env[ENV_TIMEOUT])
            except ValueError as exc:
                raise ConfigError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got {env[ENV_TIMEOUT]!r}"
                ) from exc

        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(config, **explicit)
