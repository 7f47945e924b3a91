"""
Pydantic configuration schemas for loggerkit.

Describes a whole pipeline (sinks, level floor, tag rules) so it can be
kept in YAML and applied at startup:

    level: INFO
    sinks:
      console: {type: terminal, color: true}
      logfile: {type: file, path: logs/app.log, rotation: daily}
    tags:
      trace: [net.handshake]    # always logged, any level
      exclude: [metrics]        # never logged

Usage:
    config = LoggerConfig.from_yaml("logging.yaml")
    logger = config.build_logger()    # console + logfile
    flt = config.build_filter()       # (at_least(INFO) | tag_in(...)) & ~tag_in(...)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from loggerkit.adapters import SYSTEM, FileSink, MemorySink, TerminalSink
from loggerkit.core import Logger
from loggerkit.filters import Filter, at_least, tag_in
from loggerkit.formatters import resolve_formatter
from loggerkit.records import Level


class SinkType(str, Enum):
    TERMINAL = "terminal"
    FILE = "file"
    MEMORY = "memory"


class SinkConfig(BaseModel):
    type: SinkType
    formatter: Optional[str] = None           # any: compact | detailed | json
    color: Optional[bool] = None              # terminal
    path: Optional[str] = None                # file
    rotation: Optional[str] = None            # file: daily | none
    retention_days: Optional[int] = Field(None, ge=0)  # file
    capacity: Optional[int] = Field(None, gt=0)  # memory

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in ("daily", "none"):
            raise ValueError(f"rotation must be 'daily' or 'none', got '{value}'")
        return value

    def build(self, name: str) -> Logger:
        """Instantiate the sink this entry describes."""
        formatter = resolve_formatter(self.formatter)
        if self.type == SinkType.TERMINAL:
            return TerminalSink(
                name=name,
                formatter=formatter,
                color=bool(self.color),
            )
        elif self.type == SinkType.FILE:
            return FileSink(
                name=name,
                formatter=formatter,
                path=self.path or f"logs/{name}.log",
                rotation="daily" if self.rotation is None else self.rotation,
                retention_days=30 if self.retention_days is None else self.retention_days,
            )
        elif self.type == SinkType.MEMORY:
            return MemorySink(
                name=name,
                formatter=formatter,
                capacity=10000 if self.capacity is None else self.capacity,
            )
        raise ValueError(f"Unknown sink type '{self.type}' for sink '{name}'")


class TagRulesConfig(BaseModel):
    trace: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)


class LoggerConfig(BaseModel):
    level: int | str = "DEBUG"
    sinks: Optional[dict[str, SinkConfig]] = None
    tags: Optional[TagRulesConfig] = None

    source_yaml: Optional[str] = Field(None, exclude=True)

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: int | str) -> int | str:
        Level.from_value(value)
        return value

    @property
    def resolved_level(self) -> Level:
        return Level.from_value(self.level)

    def build_logger(self) -> Logger:
        """Sinks combined in declaration order; the platform logger if none."""
        if not self.sinks:
            return SYSTEM
        loggers = [cfg.build(name) for name, cfg in self.sinks.items()]
        result = loggers[0]
        for logger in loggers[1:]:
            result = result + logger
        return result

    def build_filter(self) -> Filter:
        """Level floor, widened by trace tags, narrowed by excluded tags."""
        flt = at_least(self.resolved_level)
        rules = self.tags or TagRulesConfig()
        if rules.trace:
            flt = flt | tag_in(*rules.trace)
        if rules.exclude:
            flt = flt & ~tag_in(*rules.exclude)
        return flt

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggerConfig":
        """Load and validate from a YAML file."""
        path = Path(path)
        raw = path.read_text(encoding="utf-8")
        config = cls.from_yaml_string(raw)
        return config

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggerConfig":
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        config = cls.model_validate(data)
        config.source_yaml = yaml_string
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "LoggerConfig":
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        """Export as a plain dict."""
        return self.model_dump(mode="json", exclude_none=exclude_none)


__all__ = [
    "SinkType",
    "SinkConfig",
    "TagRulesConfig",
    "LoggerConfig",
]
