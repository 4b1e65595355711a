"""
どこで: リポジトリ直下 `main.py`。
何を: 親子関係を持つリングを回転・移動させ、run でプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import math

from ringline.api import circle, run
from ringline.core.transform import TrackedTransform

CANVAS_WIDTH = 400
CANVAS_HEIGHT = 400

# 中心を回る親。子リングはこの変換に追従する。
pivot = TrackedTransform(position=(CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2, 0.0))

rings = [
    circle(resolution=64, radius=80.0, parent=pivot),
    circle(resolution=4, radius=20.0, position=(120.0, 0.0, 0.0), parent=pivot),
    circle(resolution=12, radius=15.0, position=(-120.0, 0.0, 0.0), parent=pivot),
    circle(resolution=32, radius=30.0, position=(60.0, 60.0, 0.0), scale=(2.0, 1.0, 1.0)),
]


def update(t: float) -> None:
    pivot.rotation = (0.0, 0.0, 30.0 * t)
    # 2 秒ごとに解像度を切り替え、再生成を確認する。
    resolution = 8 if int(t / 2.0) % 2 == 0 else 64
    if rings[0].resolution != resolution:
        rings[0].resolution = resolution
    rings[3].scale = (2.0 + math.sin(t), 1.0, 1.0)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(update, rings, canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT), line_thickness=0.006)
