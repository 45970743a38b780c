"""Configuration helpers for the tl;dv MCP Server.

`load_config` reads environment variables into a typed `AppConfig`
with sensible defaults. `load_startup_config` reads only the process
switches, so they survive a bad value elsewhere. Values are validated
and normalized where appropriate.
"""

from .env import AppConfig, StartupConfig, load_config, load_startup_config

__all__ = ["AppConfig", "StartupConfig", "load_config", "load_startup_config"]
