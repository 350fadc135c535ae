"""
參考編輯器模組

安裝拼音支援:
    pip install pypinyin

主要類別:
- SimplePinyinEditor: 詞表式拼音編輯器（整合 CloudCandidates）
- SimpleLookupTable: 候選表
"""

from .simple_editor import SimpleLookupTable, SimplePinyinEditor, cached_get_pinyin_string

__all__ = [
    "SimplePinyinEditor",
    "SimpleLookupTable",
    "cached_get_pinyin_string",
]
