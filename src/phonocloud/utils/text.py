"""
拼音字串工具

雲端查詢的 key 是「正規化後的拼音」：不含空白、音節分隔或游標標記。
"""

DOUBLE_PINYIN_SEPARATORS = (" ", "|")
ANNOTATION_SEPARATOR = "'"


def utf8_length(text: str) -> int:
    """顯示字元數（非位元組數）"""
    return len(text or "")


def byte_length(text: str) -> int:
    """UTF-8 位元組數"""
    return len((text or "").encode("utf-8"))


def normalize_spelling(buffer: str) -> str:
    """
    把雙拼緩衝區正規化為連續拼音

    >>> normalize_spelling("ni hao|ma")
    'nihaoma'
    """
    result = buffer or ""
    for separator in DOUBLE_PINYIN_SEPARATORS:
        result = result.replace(separator, "")
    return result


def strip_annotation_separators(annotation: str) -> str:
    """
    去除廠商以 ' 分隔的音節

    >>> strip_annotation_separators("ni'hao")
    'nihao'
    """
    return annotation.replace(ANNOTATION_SEPARATOR, "")
