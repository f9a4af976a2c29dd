"""Telemetry - 统一日志和指标入口

提供统一的日志配置和指标 facade，便于观测性追踪。

日志格式: [module] msg
指标示例: plan.ops, plan.fallback, executor.builds, render.placeholder
"""

import logging
from collections import Counter

from panegrid import config

# 全局日志配置
_LOG_FORMAT = "[%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """配置根 logger（CLI / 服务入口调用一次）

    Args:
        level: 日志级别，默认读取 config.LOG_LEVEL
    """
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=_LOG_FORMAT,
    )


_LabelKey = tuple[tuple[str, str], ...]


def _label_key(labels: dict[str, str] | None) -> _LabelKey:
    return tuple(sorted(labels.items())) if labels else ()


class Metrics:
    """内存指标：带标签的计数器 + 无标签 gauge

    enabled=False 时只读不写（config.METRICS_ENABLED）。
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._counters: Counter[tuple[str, _LabelKey]] = Counter()
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器，如 inc("render.placeholder", {"kind": "terminal"})"""
        if self.enabled:
            self._counters[name, _label_key(labels)] += value

    def gauge(self, name: str, value: float) -> None:
        if self.enabled:
            self._gauges[name] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters[name, _label_key(labels)]

    def get_gauge(self, name: str) -> float:
        return self._gauges.get(name, 0.0)

    def reset(self) -> None:
        self._counters.clear()
        self._gauges.clear()


# 全局指标实例
metrics = Metrics(enabled=config.METRICS_ENABLED)
