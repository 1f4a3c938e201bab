"""Per-message capability pipeline."""

from lingua_core.pipeline.controller import PipelineController, summary_eligible
from lingua_core.pipeline.detection import LanguageDetectionStage
from lingua_core.pipeline.summarization import SummarizationStage
from lingua_core.pipeline.translation import TranslationStage

__all__ = [
    "LanguageDetectionStage",
    "PipelineController",
    "SummarizationStage",
    "TranslationStage",
    "summary_eligible",
]
