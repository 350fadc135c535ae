"""
回應解析器抽象基類

統一流程（模板方法模式）：
1. 清除上一次的結果（候選與 annotation）
2. 串流不存在或無法讀取 -> NETWORK_ERROR
3. 不是合法 JSON -> BAD_FORMAT
4. 交給子類做廠商專屬的結構驗證 (parse_document)

使用範例：
    >>> parser = GoogleResponseParser()
    >>> parser.parse_data('["SUCCESS",[["nihao",["你好","拟好"]]]]')
    <ParseOutcome.SUCCESS: 'success'>
    >>> parser.candidates
    ['你好', '拟好']
"""

import json
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, List, Optional, Union

from phonocloud.core.candidate import CandidateType, EnhancedCandidate
from phonocloud.utils.logger import get_logger

from .outcome import ParseOutcome, VendorResponse

logger = get_logger("cloud.parser")


class BaseResponseParser(ABC):
    """
    廠商回應解析器

    parse() 回傳 SUCCESS 時，candidates 與 annotation 有效，直到下一次 parse。
    """

    vendor_name: str = "base"

    def __init__(self):
        self.candidates: List[str] = []
        self.annotation: Optional[str] = None
        self.outcome: Optional[ParseOutcome] = None

    def reset(self) -> None:
        self.candidates = []
        self.annotation = None
        self.outcome = None

    def parse(self, stream: Optional[BinaryIO]) -> ParseOutcome:
        """從串流解析；讀取完畢後關閉串流"""
        self.reset()

        if stream is None:
            return self._finish(ParseOutcome.NETWORK_ERROR)

        try:
            data = stream.read()
        except OSError as exc:
            logger.debug(f"[{self.vendor_name}] stream read failed: {exc}")
            return self._finish(ParseOutcome.NETWORK_ERROR)
        finally:
            stream.close()

        return self._parse_payload(data)

    def parse_data(self, data: Union[str, bytes, None]) -> ParseOutcome:
        """從已取得的文字/位元組解析"""
        self.reset()

        if data is None:
            return self._finish(ParseOutcome.NETWORK_ERROR)

        return self._parse_payload(data)

    def _parse_payload(self, data: Union[str, bytes]) -> ParseOutcome:
        try:
            root = json.loads(data)
        except (ValueError, UnicodeDecodeError) as exc:
            logger.debug(f"[{self.vendor_name}] bad format: {exc}")
            return self._finish(ParseOutcome.BAD_FORMAT)

        return self._finish(self.parse_document(root))

    def _finish(self, outcome: ParseOutcome) -> ParseOutcome:
        self.outcome = outcome
        return outcome

    @abstractmethod
    def parse_document(self, root: Any) -> ParseOutcome:
        """驗證 JSON 結構並填入 candidates 與 annotation"""
        pass

    @property
    def response(self) -> VendorResponse:
        return VendorResponse(
            outcome=self.outcome if self.outcome is not None else ParseOutcome.NETWORK_ERROR,
            candidates=list(self.candidates),
            annotation=self.annotation,
        )

    def get_candidates(self) -> List[EnhancedCandidate]:
        """把候選字串轉成雲端類型的 EnhancedCandidate"""
        return [
            EnhancedCandidate(display_string=text, candidate_type=CandidateType.CLOUD_INPUT, candidate_id=index)
            for index, text in enumerate(self.candidates)
        ]
