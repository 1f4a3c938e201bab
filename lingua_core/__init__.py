"""Lingua Core 顶层包。

该包实现会话消息的按条能力流水线：
语言检测（带置信度门限）、要点摘要与翻译，
包括能力宿主适配、获取网关、会话存储与编排控制器。
"""

from lingua_core.pipeline import PipelineController

__all__ = ["PipelineController"]
