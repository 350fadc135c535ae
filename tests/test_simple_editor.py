"""
測試參考編輯器與 CloudCandidates 的整合

本地候選依 pypinyin 計算詞表拼音；雲端回應由 FakeTransport 提供。
"""

import pytest

from phonocloud import CloudConfig, CloudVendor
from phonocloud.core.candidate import LOADING_TEXT, PENDING_TEXT, CandidateType
from phonocloud.editor import SimpleLookupTable, SimplePinyinEditor, cached_get_pinyin_string

LEXICON = ["你好", "拟好", "你们", "百度"]


@pytest.fixture
def editor(loop, transport):
    config = CloudConfig(vendor=CloudVendor.GOOGLE, delay_ms=100, candidates_number=1)
    return SimplePinyinEditor(LEXICON, transport=transport, cloud_config=config, loop=loop)


class TestPinyin:
    def test_pinyin_string(self):
        assert cached_get_pinyin_string("百度") == "baidu"
        assert cached_get_pinyin_string("你好") == "nihao"


class TestLocalCandidates:
    def test_without_cloud(self):
        editor = SimplePinyinEditor(LEXICON)
        editor.set_text("ni")

        assert editor.cloud is None
        assert [c.display_string for c in editor.candidates] == ["你好", "拟好", "你们"]
        assert all(c.candidate_type is CandidateType.NORMAL for c in editor.candidates)

    def test_exact_matches_are_nbest(self):
        editor = SimplePinyinEditor(LEXICON)
        editor.set_text("nihao")

        assert [c.candidate_type for c in editor.candidates] == [CandidateType.NBEST_MATCH] * 2
        assert editor.lookup_table.labels == ["你好", "拟好"]

    def test_commit_local(self):
        editor = SimplePinyinEditor(LEXICON)
        editor.set_text("baidu")

        assert editor.select_candidate(0) == "百度"
        assert editor.committed == ["百度"]
        assert editor.text == ""


class TestCloudIntegration:
    def test_full_cycle(self, editor, loop, transport):
        repaints = []
        editor._on_repaint = repaints.append

        for ch in "nihao":
            editor.insert(ch)
        assert editor.lookup_table.labels == ["你好", "拟好", PENDING_TEXT]

        loop.advance(0.1)
        assert len(transport.requests) == 1
        assert editor.lookup_table.labels == ["你好", "拟好", LOADING_TEXT]

        transport.respond(transport.requests[0], '["SUCCESS",[["nihao",["你好啊"]]]]')
        assert editor.lookup_table.labels == ["你好", "拟好", "☁你好啊"]
        assert repaints[-1] == ["你好", "拟好", "☁你好啊"]

        assert editor.select_candidate(2) == "你好啊"
        assert editor.committed == ["你好啊"]

    def test_typing_burst_issues_one_request(self, editor, loop, transport):
        for ch in "nihao":
            editor.insert(ch)
            loop.advance(0.02)
        loop.advance(0.5)

        assert len(transport.requests) == 1
        assert "text=nihao" in transport.requests[0].url

    def test_selecting_placeholder_commits_nothing(self, editor, loop, transport):
        editor.set_text("nihao")
        loop.advance(0.1)

        assert editor.select_candidate(2) is None
        assert editor.committed == []
        assert editor.text == "nihao"

    def test_double_pinyin_uses_buffer(self, loop, transport):
        config = CloudConfig(vendor=CloudVendor.GOOGLE, delay_ms=100, candidates_number=1)
        editor = SimplePinyinEditor(LEXICON, transport=transport, cloud_config=config, loop=loop, double_pinyin=True)
        editor.set_text("nihao", buffer="ni hao")
        loop.advance(0.1)

        assert editor.auxiliary_text == "ni hao"
        assert "text=nihao" in transport.requests[0].url


class TestLookupTable:
    def test_cursor_is_clamped(self):
        table = SimpleLookupTable()
        table.set_cursor_pos(5)
        assert table.cursor_pos() == 0

        for label in ["a", "b", "c"]:
            table.append_candidate(label)
        table.set_cursor_pos(5)
        assert table.cursor_pos() == 2
        assert len(table) == 3
        assert table[1] == "b"
