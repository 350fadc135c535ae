"""
Google 輸入工具回應解析

回應形狀:
    ["SUCCESS", [["nihao", ["你好", "拟好", ...], [], {...}]]]
"""

from typing import Any

from phonocloud.core.candidate import INVALID_DATA_TEXT_WITHOUT_PREFIX

from .base import BaseResponseParser
from .outcome import ParseOutcome

SUCCESS_STATUS = "SUCCESS"


class GoogleResponseParser(BaseResponseParser):
    vendor_name = "google"

    def parse_document(self, root: Any) -> ParseOutcome:
        if not isinstance(root, list):
            return ParseOutcome.BAD_FORMAT

        if len(root) <= 1:
            return ParseOutcome.INVALID_DATA

        if root[0] != SUCCESS_STATUS:
            return ParseOutcome.INVALID_DATA

        response_array = root[1]
        if not isinstance(response_array, list) or len(response_array) < 1:
            return ParseOutcome.INVALID_DATA

        result_array = response_array[0]
        if not isinstance(result_array, list) or not result_array:
            return ParseOutcome.INVALID_DATA

        annotation = result_array[0]
        if not isinstance(annotation, str):
            return ParseOutcome.INVALID_DATA

        self.annotation = annotation

        candidate_array = result_array[1] if len(result_array) > 1 else None
        if not isinstance(candidate_array, list) or not candidate_array:
            return ParseOutcome.NO_CANDIDATES

        for candidate in candidate_array:
            if isinstance(candidate, str):
                self.candidates.append(candidate)
            else:
                self.candidates.append(INVALID_DATA_TEXT_WITHOUT_PREFIX)

        return ParseOutcome.SUCCESS
