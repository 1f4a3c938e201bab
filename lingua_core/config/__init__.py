"""配置加载（pydantic-settings + config.yaml）。"""

from lingua_core.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
