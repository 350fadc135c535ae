"""
回應解析模組

兩種廠商解析器共用 BaseResponseParser 的流程，由配置中的 vendor 選擇：
- GoogleResponseParser: 頂層為陣列
- BaiduResponseParser: 頂層為物件
"""

from phonocloud.config import CloudVendor

from .baidu import BaiduResponseParser
from .base import BaseResponseParser
from .google import GoogleResponseParser
from .outcome import ParseOutcome, VendorResponse

_PARSERS = {
    CloudVendor.BAIDU: BaiduResponseParser,
    CloudVendor.GOOGLE: GoogleResponseParser,
}


def create_parser(vendor: CloudVendor) -> BaseResponseParser:
    """依廠商建立解析器"""
    return _PARSERS[CloudVendor.coerce(vendor)]()


__all__ = [
    "BaseResponseParser",
    "GoogleResponseParser",
    "BaiduResponseParser",
    "ParseOutcome",
    "VendorResponse",
    "create_parser",
]
