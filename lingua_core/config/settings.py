"""配置管理模块。

支持从 .env、config.yaml 以及环境变量加载配置。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("LINGUA_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- Capability Host ----
    capability_host: Literal["http"] = Field(
        default="http",
        description="能力宿主实现，目前只有本地推理守护进程 (http)",
    )
    capability_base_url: str = Field(
        default="http://127.0.0.1:8765",
        description="本地推理守护进程的基础URL",
    )
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    capability_ready_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="等待模型下载完成的最长时间（秒），为空表示不限",
    )
    download_poll_interval: float = Field(
        default=0.5,
        gt=0,
        description="轮询会话就绪状态的间隔（秒）",
    )

    # ---- Pipeline 策略 ----
    confidence_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="语言检测置信度阈值，严格小于该值视为 Unknown",
    )
    summary_min_length: int = Field(default=150, ge=0, description="可摘要文本的最小长度（严格大于）")
    summary_language: str = Field(default="en", description="允许摘要的语言代码")
    translation_use_detected_source: bool = Field(
        default=False,
        description="翻译时是否使用检测到的语言作为源语言（默认源语言与目标语言相同）",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")
    log_to_file: bool = Field(default=True, description="是否写入日志文件")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LINGUA_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("summary_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("capability_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
