"""
雲端候選範例 - 模擬逐字輸入

這個範例以 SimplePinyinEditor 模擬使用者逐字輸入拼音，
展示防抖、佔位、loading 與回應合併後的候選表變化。

執行前請確認可以連線到雲端輸入法服務；
加上 --vendor google 可改用 Google 輸入工具。
"""

import argparse
import asyncio
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phonocloud import CloudConfig, CloudVendor, HttpxTransport, enable_debug_logging
from phonocloud.editor import SimplePinyinEditor

LEXICON = ["你好", "拟好", "你们", "百度", "北京", "背景"]


async def demo_typing(vendor: CloudVendor, spelling: str):
    """逐字輸入並列印每次重繪的候選表"""

    print("=" * 60)
    print(f"雲端候選展示 ({vendor.name})")
    print("=" * 60)

    def on_repaint(labels):
        print(f"  候選表: {labels}")

    def on_event(event):
        print(f"  [事件] {event['type']}: {event.get('spelling', '')}")

    config = CloudConfig(vendor=vendor, delay_ms=300, candidates_number=3, request_timeout=5.0)
    transport = HttpxTransport.from_config(config)
    editor = SimplePinyinEditor(
        LEXICON,
        transport=transport,
        cloud_config=config,
        on_event=on_event,
        on_repaint=on_repaint,
    )

    for ch in spelling:
        print(f"輸入 '{ch}'")
        editor.insert(ch)
        await asyncio.sleep(0.05)

    # 等待防抖與回應
    await asyncio.sleep(3.0)

    if editor.candidates:
        print(f"選擇最後一個候選: {editor.select_candidate(len(editor.candidates) - 1)!r}")

    editor.cloud.close()
    await transport.aclose()


def main():
    parser = argparse.ArgumentParser(description="phonocloud demo")
    parser.add_argument("spelling", nargs="?", default="beijing")
    parser.add_argument("--vendor", default="baidu", choices=["baidu", "google"])
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        enable_debug_logging()

    asyncio.run(demo_typing(CloudVendor.coerce(args.vendor), args.spelling))


if __name__ == "__main__":
    main()
