"""Static display-string tables, one flat mapping per language tag.

The tables are wrapped in ``MappingProxyType`` so callers cannot mutate the
shared copies.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from docbench.utils.errors import NotFoundError

DEFAULT_LANGUAGE = "en"

_EN = {
    "title": "FDA Document Intelligence Workbench",
    "subtitle": "Advanced Document Analysis & Multi-Agent Processing System",
    "upload": "Upload Documents",
    "paste": "Paste Text Content",
    "docs": "Documents",
    "ocr": "OCR Processing",
    "wordgraph": "Word Graph Analysis",
    "smartnote": "Smart Note",
    "qna": "Ask AI",
    "settings": "Settings",
    "theme": "Visual Style",
    "select_style": "Use Magic Wheel to select style",
    "generate": "Run OCR",
    "processing": "Processing...",
    "no_key": "Please enter your Gemini API Key in settings.",
    "transform": "Transform to Smart Note",
    "analyzing": "Analyzing...",
    "entities": "Extracted Entities",
    "mindgraph": "Mind Graph",
    "formatted": "Formatted Note",
    "questions": "Follow-up Questions",
    "preview": "Preview",
    "ask_placeholder": "Ask a question about your documents...",
    "send": "Send",
    "model": "Model",
    "max_tokens": "Max Tokens",
    "markdown_view": "Markdown View",
    "raw_view": "Raw Text",
    "ask_title": "Document Q&A",
    "ask_subtitle": "Query your documents with custom parameters",
    "ocr_settings": "OCR Settings",
    "agent_analysis": "Agent Analysis",
    "run_analysis": "Run Analysis",
    "edit_result": "Edit Result",
    "agent_prompt": "Agent Prompt",
    "ocr_placeholder": "OCR text will appear here. Select a document and run OCR.",
    "analysis_placeholder": "Agent analysis results will appear here.",
}

_ZH_TW = {
    "title": "FDA 文件智能工作台",
    "subtitle": "進階文件分析與多代理處理系統",
    "upload": "上傳文件",
    "paste": "貼上文字內容",
    "docs": "文件",
    "ocr": "OCR 處理",
    "wordgraph": "詞彙圖分析",
    "smartnote": "智能筆記",
    "qna": "AI 問答",
    "settings": "設定",
    "theme": "視覺風格",
    "select_style": "使用魔法輪盤選擇風格",
    "generate": "執行 OCR",
    "processing": "處理中...",
    "no_key": "請在設定中輸入 Gemini API 金鑰。",
    "transform": "轉換為智能筆記",
    "analyzing": "分析中...",
    "entities": "擷取實體",
    "mindgraph": "思維圖",
    "formatted": "格式化筆記",
    "questions": "後續問題",
    "preview": "預覽",
    "ask_placeholder": "關於文件提出問題...",
    "send": "發送",
    "model": "模型",
    "max_tokens": "最大 Token",
    "markdown_view": "Markdown 檢視",
    "raw_view": "純文字",
    "ask_title": "文件問答",
    "ask_subtitle": "使用自訂參數查詢您的文件",
    "ocr_settings": "OCR 設定",
    "agent_analysis": "代理分析",
    "run_analysis": "執行分析",
    "edit_result": "編輯結果",
    "agent_prompt": "代理提示詞",
    "ocr_placeholder": "OCR 文字將顯示於此。請選擇文件並執行 OCR。",
    "analysis_placeholder": "代理分析結果將顯示於此。",
}

LOCALIZATION: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": MappingProxyType(_EN),
        "zh-TW": MappingProxyType(_ZH_TW),
    }
)


def supported_languages() -> list[str]:
    return list(LOCALIZATION)


def get_locale(language: str) -> Mapping[str, str]:
    """Return the string table for *language*.

    Raises:
        NotFoundError: If no table exists for the tag.
    """
    table = LOCALIZATION.get(language)
    if table is None:
        raise NotFoundError(
            f"Unsupported language: {language}. Available: {', '.join(LOCALIZATION)}"
        )
    return table


def toggle_language(language: str) -> str:
    """Switch between the two bundled languages, as the header button does."""
    return "zh-TW" if language == "en" else "en"
