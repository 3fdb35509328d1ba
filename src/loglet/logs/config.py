# -*- coding: utf-8 -*-
"""
日志配置模块

支持：
- Pydantic 配置模型
- YAML 配置文件加载
- 环境变量覆盖
- 根据配置创建 Logger 并打开日志文件写入流

示例 YAML 配置:
```yaml
log:
  label: "my-service"
  debug_mode:
    enabled: false
    print_message: true
    write_to_file: true
  inspect:
    colors: null
    depth: 4
    width: 100
  write_stream:
    path: "./logs/latest.log"
    mode: rename
    compression: gzip
```
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .constants import FileWriteStreamMode
from .formatter import Formatter
from .inspection import InspectOptions
from .logger import DebugMode, Logger
from .rotate import UseDefaultCompression, WriteStreamOptions
from .utils import COMPRESSORS

logger = logging.getLogger(__name__)


# ======================== 配置模型定义 ========================


class DebugModeConfig(BaseModel):
    """DEBUG 级别输出配置（None 表示自动检测/默认行为）"""

    enabled: Optional[bool] = Field(default=None, description="是否处于调试状态")
    print_message: Optional[bool] = Field(default=None, description="是否输出到控制台")
    write_to_file: Optional[bool] = Field(default=None, description="是否写入文件")

    def to_debug_mode(self) -> DebugMode:
        return DebugMode(
            enabled=self.enabled,
            print_message=self.print_message,
            write_to_file=self.write_to_file,
        )


class InspectConfig(BaseModel):
    """值检视配置"""

    colors: Optional[bool] = Field(default=None, description="是否着色，None 表示自动检测")
    depth: Optional[int] = Field(default=None, ge=0, description="容器最大展开深度")
    width: int = Field(default=80, ge=1, description="单行最大宽度")
    compact: bool = Field(default=False, description="紧凑格式")
    sort_dicts: bool = Field(default=False, description="字典键排序")

    def to_inspect_options(self) -> InspectOptions:
        return InspectOptions(
            colors=self.colors,
            depth=self.depth,
            width=self.width,
            compact=self.compact,
            sort_dicts=self.sort_dicts,
        )


class WriteStreamConfig(BaseModel):
    """日志文件写入流配置"""

    path: str = Field(description="日志文件路径")
    mode: FileWriteStreamMode = Field(
        default=FileWriteStreamMode.APPEND, description="打开模式: append, truncate, rename"
    )
    compression: str = Field(default="gzip", description="rename 模式下的压缩算法: gzip, brotli")
    initial_data: Optional[str] = Field(
        default=None, description="新文件初始内容，None 表示写入日期头行"
    )

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, v):
        """模式名大小写不敏感"""
        return FileWriteStreamMode.parse(v)

    @field_validator("compression", mode="before")
    @classmethod
    def parse_compression(cls, v):
        v = str(v).strip().lower()
        if v not in COMPRESSORS:
            raise ValueError(f"compression must be one of {sorted(COMPRESSORS)}")
        return v

    def to_write_stream_options(self) -> WriteStreamOptions:
        return WriteStreamOptions(
            path=self.path,
            mode=self.mode,
            rename_file=UseDefaultCompression(self.compression),
            initial_data=self.initial_data,
        )


class LogConfig(BaseModel):
    """Logger 完整配置"""

    label: Optional[str] = Field(default=None, description="标签")
    debug_mode: DebugModeConfig = Field(default_factory=DebugModeConfig, description="DEBUG 配置")
    inspect: InspectConfig = Field(default_factory=InspectConfig, description="值检视配置")
    write_stream: Optional[WriteStreamConfig] = Field(default=None, description="日志文件配置")
    formatter_disabled: bool = Field(default=False, description="禁用前缀格式化")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """从字典创建配置"""
        return cls(**(data or {}))

    def to_logger_kwargs(self) -> Dict[str, Any]:
        """转换为 Logger 构造参数"""
        return {
            "label": self.label,
            "debug_mode": self.debug_mode.to_debug_mode(),
            "inspect_options": self.inspect.to_inspect_options(),
            "formatter": Formatter(disabled=self.formatter_disabled),
        }


class AppConfig(BaseModel):
    """配置根节点"""

    log: LogConfig = Field(default_factory=LogConfig, description="日志配置")


# ======================== 配置加载器 ========================


class ConfigLoader:
    """
    配置加载器

    支持从 YAML 文件、字典或环境变量加载配置
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        初始化配置加载器

        Args:
            config_file: YAML 配置文件路径
        """
        self.config_file = config_file
        self._raw_config: Dict[str, Any] = {}
        self._config: Optional[AppConfig] = None

    def load(self) -> "ConfigLoader":
        """
        加载配置

        Returns:
            self，支持链式调用
        """
        if self.config_file:
            self._load_from_file(self.config_file)
        return self

    def _load_from_file(self, file_path: str) -> None:
        """从文件加载配置"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            self._raw_config = yaml.safe_load(f) or {}

        self._config = None
        logger.info(f"Loaded config from {file_path}")

    def load_from_dict(self, config_dict: Dict[str, Any]) -> "ConfigLoader":
        """
        从字典加载配置（与已有配置深度合并）

        Args:
            config_dict: 配置字典

        Returns:
            self
        """
        self._deep_merge(self._raw_config, config_dict)
        self._config = None
        return self

    def load_from_env(self, prefix: str = "LOGLET") -> "ConfigLoader":
        """
        从环境变量加载配置

        环境变量格式: {PREFIX}__LOG__WRITE_STREAM__PATH
        使用双下划线分隔层级，以便字段名本身包含下划线。

        Args:
            prefix: 环境变量前缀

        Returns:
            self
        """
        env_config: Dict[str, Any] = {}
        env_prefix = f"{prefix}__"

        for key, value in os.environ.items():
            if not key.startswith(env_prefix):
                continue

            parts = key[len(env_prefix):].lower().split("__")
            self._set_nested_value(env_config, parts, value)

        self._deep_merge(self._raw_config, env_config)
        self._config = None
        return self

    def _set_nested_value(self, config: Dict, keys: List[str], value: str) -> None:
        """设置嵌套字典值"""
        for key in keys[:-1]:
            config = config.setdefault(key, {})

        # 布尔、数字等类型由 pydantic 按字段类型转换，字符串字段保持原样
        final_key = keys[-1]
        if value.lower() in ("null", "none"):
            config[final_key] = None
        else:
            config[final_key] = value

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """深度合并字典"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value
        return base

    def get_config(self) -> AppConfig:
        """获取解析后的配置"""
        if self._config is None:
            self._config = AppConfig(**self._raw_config)
        return self._config

    def get_log_config(self) -> LogConfig:
        return self.get_config().log

    def get_raw_config(self) -> Dict[str, Any]:
        """获取原始配置字典"""
        return self._raw_config


# ======================== 便捷函数 ========================


def load_config(
    config_file: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    env_prefix: Optional[str] = None,
) -> LogConfig:
    """
    加载日志配置

    优先级: env_prefix > config_dict > config_file > 默认值

    Args:
        config_file: YAML 配置文件路径
        config_dict: 配置字典（根节点为 ``log``）
        env_prefix: 环境变量前缀

    Returns:
        LogConfig 实例
    """
    loader = ConfigLoader(config_file)

    if config_file:
        loader.load()

    if config_dict:
        loader.load_from_dict(config_dict)

    if env_prefix:
        loader.load_from_env(env_prefix)

    return loader.get_log_config()


async def install_logger(config: Optional[LogConfig] = None) -> Logger:
    """根据配置创建 Logger，并在配置了 write_stream 时打开日志文件

    Args:
        config: 日志配置，如果为 None 则使用默认配置

    Returns:
        Logger: 已配置的 Logger
    """
    if config is None:
        config = LogConfig()

    log = Logger(**config.to_logger_kwargs())

    if config.write_stream is not None:
        await log.create_file_write_stream(config.write_stream.to_write_stream_options())

    logger.debug(
        f"Logger installed: label={config.label}, "
        f"write_stream={config.write_stream.path if config.write_stream else None}"
    )
    return log
