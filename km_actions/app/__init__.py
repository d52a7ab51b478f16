"""Application-level utilities (environment, settings, runtime configuration)."""

from .settings import HarnessSettings
from .environment import Paths, build_default_paths
from .configuration import RuntimeConfig, load_runtime_config
