"""能力名称与调用策略常量。

摘要参数、支持的翻译语言等都是策略常量，集中放在这里，
Stage 与 Controller 只引用这里的定义。"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping


DETECTOR = "languageDetector"
SUMMARIZER = "summarizer"
TRANSLATOR = "translator"

CAPABILITIES = (DETECTOR, SUMMARIZER, TRANSLATOR)


@dataclass(frozen=True)
class SummarizerOptions:
    """摘要会话的固定参数。"""

    shared_context: str = "This is a scientific article"
    type: str = "key-points"
    format: str = "markdown"
    length: str = "medium"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sharedContext": self.shared_context,
            "type": self.type,
            "format": self.format,
            "length": self.length,
        }


@dataclass(frozen=True)
class TranslatorOptions:
    source_language: str
    target_language: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sourceLanguage": self.source_language,
            "targetLanguage": self.target_language,
        }


SUMMARIZER_OPTIONS = SummarizerOptions()


SUPPORTED_LANGUAGES: Mapping[str, str] = {
    "en": "English",
    "pt": "Portuguese",
    "es": "Spanish",
    "ru": "Russian",
    "tr": "Turkish",
    "fr": "French",
}


def language_name(code: str) -> str:
    """根据语言代码返回显示名，不区分大小写；未知代码原样返回。"""

    return SUPPORTED_LANGUAGES.get(code.lower(), code)
