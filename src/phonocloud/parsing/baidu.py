"""
百度雲輸入回應解析

回應形狀:
    {"status": "T", "result": [[["百度", 2, {...}], ...], "bai'du"]}

annotation 以 ' 分隔音節，解析後去除分隔符。
單筆候選缺少文字時降級為無效標記，不讓整個回應失敗。
"""

from typing import Any

from phonocloud.core.candidate import INVALID_DATA_TEXT_WITHOUT_PREFIX
from phonocloud.utils.text import strip_annotation_separators

from .base import BaseResponseParser
from .outcome import ParseOutcome

SUCCESS_STATUS = "T"


class BaiduResponseParser(BaseResponseParser):
    vendor_name = "baidu"

    def parse_document(self, root: Any) -> ParseOutcome:
        if not isinstance(root, dict):
            return ParseOutcome.BAD_FORMAT

        if "status" not in root:
            return ParseOutcome.INVALID_DATA

        if root["status"] != SUCCESS_STATUS:
            return ParseOutcome.INVALID_DATA

        result_array = root.get("result")
        if not isinstance(result_array, list) or len(result_array) < 2:
            return ParseOutcome.INVALID_DATA

        candidate_array, annotation = result_array[0], result_array[1]
        if not isinstance(annotation, str):
            return ParseOutcome.INVALID_DATA

        self.annotation = strip_annotation_separators(annotation)

        if not isinstance(candidate_array, list) or not candidate_array:
            return ParseOutcome.NO_CANDIDATES

        for candidate in candidate_array:
            if isinstance(candidate, list) and candidate and isinstance(candidate[0], str):
                self.candidates.append(candidate[0])
            else:
                self.candidates.append(INVALID_DATA_TEXT_WITHOUT_PREFIX)

        return ParseOutcome.SUCCESS
