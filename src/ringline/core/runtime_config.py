# どこで: `src/ringline/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 円の既定値やプレビューウィンドウの設定を、コードを変えずにユーザーが指定できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """ringline の実行時設定。"""

    config_path: Path | None
    circle_resolution: int
    circle_radius: float
    window_position: tuple[int, int]
    canvas_size: tuple[int, int]
    fps: float
    background_color: tuple[float, float, float]
    line_color: tuple[float, float, float]
    line_thickness: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".ringline" / "config.yaml",
        Path.home() / ".config" / "ringline" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    return (_as_int(seq[0], key=key), _as_int(seq[1], key=key))


def _as_rgb(value: Any, *, key: str) -> tuple[float, float, float]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 3:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}")
    r, g, b = (_as_float(c, key=key) for c in seq)
    return (r, g, b)


def _require(section: dict[str, Any], name: str, *, key: str) -> Any:
    value = section.get(name)
    if value is None:
        raise RuntimeError(
            f"{key} が未設定です（同梱 default_config.yaml を確認してください）"
        )
    return value


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    return _load_yaml_text(path.read_text(encoding="utf-8"), source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("ringline")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="ringline/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション単位で浅くマージする（後勝ち）。"""

    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            section = dict(merged[key])
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value
    return merged


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.ringline/config.yaml` / `~/.config/ringline/config.yaml`
    3) `set_config_path()` で指定した明示パス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = _as_int(_require(payload, "version", key="version"), key="version")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    circle = _as_mapping(payload.get("circle"), key="circle")
    ui = _as_mapping(payload.get("ui"), key="ui")
    render = _as_mapping(payload.get("render"), key="render")

    fps = _as_float(_require(render, "fps", key="render.fps"), key="render.fps")
    line_thickness = _as_float(
        _require(render, "line_thickness", key="render.line_thickness"),
        key="render.line_thickness",
    )
    if line_thickness <= 0:
        raise ValueError(f"render.line_thickness は正の値である必要がある: got={line_thickness}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        circle_resolution=_as_int(
            _require(circle, "resolution", key="circle.resolution"), key="circle.resolution"
        ),
        circle_radius=_as_float(
            _require(circle, "radius", key="circle.radius"), key="circle.radius"
        ),
        window_position=_as_int_pair(
            _require(ui, "window_position", key="ui.window_position"),
            key="ui.window_position",
        ),
        canvas_size=_as_int_pair(
            _require(ui, "canvas_size", key="ui.canvas_size"), key="ui.canvas_size"
        ),
        fps=fps,
        background_color=_as_rgb(
            _require(render, "background_color", key="render.background_color"),
            key="render.background_color",
        ),
        line_color=_as_rgb(
            _require(render, "line_color", key="render.line_color"), key="render.line_color"
        ),
        line_thickness=line_thickness,
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
