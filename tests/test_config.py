"""
測試配置模組
"""

import logging

import pytest

from phonocloud.config import (
    BAIDU_URL_TEMPLATE,
    CloudConfig,
    CloudVendor,
)
from phonocloud.utils.logger import TimingContext, get_logger, setup_logger
from phonocloud.utils.text import byte_length, normalize_spelling, strip_annotation_separators


class TestCloudConfig:
    def test_defaults(self):
        config = CloudConfig()

        assert config.vendor is CloudVendor.BAIDU
        assert config.delay_ms == 600
        assert config.candidates_number == 1
        assert config.min_trigger_length == 2
        assert config.min_utf8_trigger_length == 2
        assert config.url_templates[CloudVendor.BAIDU] == BAIDU_URL_TEMPLATE

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"delay_ms": -1}, "delay_ms"),
            ({"candidates_number": 0}, "candidates_number"),
            ({"min_trigger_length": -1}, "Trigger lengths"),
            ({"request_timeout": 0}, "request_timeout"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            CloudConfig(**kwargs)

    def test_build_url_encodes_spelling(self):
        config = CloudConfig(vendor=CloudVendor.GOOGLE, candidates_number=4)
        url = config.build_url("ni'hao ma")

        assert url == "https://www.google.com/inputtools/request?ime=pinyin&text=ni%27hao%20ma&num=4"

    def test_custom_template(self):
        config = CloudConfig(
            vendor=CloudVendor.GOOGLE,
            url_templates={CloudVendor.GOOGLE: "http://mirror.test/{spelling}/{count}"},
        )
        assert config.build_url("nihao") == "http://mirror.test/nihao/1"

    def test_missing_template(self):
        with pytest.raises(ValueError, match="No URL template"):
            CloudConfig(vendor=CloudVendor.GOOGLE, url_templates={})

    def test_from_mapping_with_setting_keys(self):
        config = CloudConfig.from_mapping({
            "cloud-input-source": 1,
            "cloud-request-delay-time": "250",
            "cloud-candidates-number": 3,
            "unrelated-key": True,
        })

        assert config.vendor is CloudVendor.GOOGLE
        assert config.delay_ms == 250
        assert config.candidates_number == 3

    def test_from_mapping_with_field_names(self):
        config = CloudConfig.from_mapping({
            "vendor": "google",
            "url_templates": {"GOOGLE": "http://g.test/{spelling}"},
        })

        assert config.build_url("ni") == "http://g.test/ni"
        assert config.url_templates[CloudVendor.BAIDU] == BAIDU_URL_TEMPLATE

    def test_vendor_coerce(self):
        assert CloudVendor.coerce(0) is CloudVendor.BAIDU
        assert CloudVendor.coerce("Baidu") is CloudVendor.BAIDU
        assert CloudVendor.coerce(CloudVendor.GOOGLE) is CloudVendor.GOOGLE
        with pytest.raises(ValueError, match="Unknown cloud vendor"):
            CloudVendor.coerce("bing")

    def test_annotation_trust(self):
        assert CloudVendor.GOOGLE.trusts_annotation
        assert not CloudVendor.BAIDU.trusts_annotation


class TestTextUtils:
    def test_normalize_spelling(self):
        assert normalize_spelling("ni hao|ma") == "nihaoma"
        assert normalize_spelling("") == ""

    def test_strip_annotation_separators(self):
        assert strip_annotation_separators("bai'du") == "baidu"

    def test_byte_length(self):
        assert byte_length("你") == 3
        assert byte_length("n") == 1


class TestLogger:
    def test_namespace(self):
        assert get_logger("cloud.scheduler").name == "phonocloud.cloud.scheduler"
        assert get_logger().name == "phonocloud"

    def test_setup_is_idempotent(self):
        logger = setup_logger(level=logging.DEBUG)
        handlers = len(logger.handlers)
        setup_logger(level=logging.WARNING)

        assert len(logger.handlers) == handlers
        assert logger.level == logging.WARNING

    def test_timing_callback(self):
        calls = []
        with TimingContext("op", callback=lambda op, elapsed: calls.append((op, elapsed))):
            pass

        assert calls[0][0] == "op"
        assert calls[0][1] >= 0.0
