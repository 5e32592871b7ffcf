"""画面キャプチャと粒子設定の保存・読み込み（PNG + JSONメタデータ）"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import pygame

from yubisaki import config


def _capture_dir(directory) -> Path:
    return Path(directory if directory is not None else config.CAPTURE_DIR)


def save_capture(surface: pygame.Surface, simulation, directory=None,
                 timestamp: Optional[datetime] = None) -> Path:
    """
    現在の画面と粒子設定を保存

    Args:
        surface: 保存する画面
        simulation: ParticleSimulation（設定と粒子数をメタデータに記録）
        directory: 保存先（None なら config.CAPTURE_DIR）
        timestamp: 保存時刻（None なら現在時刻）

    Returns:
        保存したPNGのパス（メタデータは同名の .json）
    """
    out_dir = _capture_dir(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    timestamp = timestamp or datetime.now()
    capture_id = timestamp.strftime("capture-%Y%m%d-%H%M%S-%f")
    image_path = out_dir / f"{capture_id}.png"

    pygame.image.save(surface, str(image_path))

    width, height = surface.get_size()
    metadata = {
        "id": capture_id,
        "particleSettings": simulation.params.to_dict(),
        "activeParticles": simulation.pool.active_count,
        "timestamp": timestamp.isoformat(),
        "screenSize": {"width": width, "height": height},
    }
    image_path.with_suffix(".json").write_text(
        json.dumps(metadata, ensure_ascii=False, indent=2), encoding="utf-8"
    )

    if config.DEBUG_MODE:
        print(f"[DEBUG] capture saved: {image_path}")
    return image_path


def list_captures(directory=None) -> list[dict]:
    """保存済みキャプチャのメタデータ一覧（新しい順）"""
    out_dir = _capture_dir(directory)
    if not out_dir.exists():
        return []
    captures = [
        json.loads(path.read_text(encoding="utf-8"))
        for path in out_dir.glob("capture-*.json")
    ]
    return sorted(captures, key=lambda m: m["timestamp"], reverse=True)


def load_capture(capture_id: str, directory=None) -> tuple[pygame.Surface, dict]:
    """キャプチャ画像とメタデータを読み込む"""
    out_dir = _capture_dir(directory)
    metadata = json.loads((out_dir / f"{capture_id}.json").read_text(encoding="utf-8"))
    image = pygame.image.load(str(out_dir / f"{capture_id}.png"))
    return image, metadata


def delete_capture(capture_id: str, directory=None) -> bool:
    """キャプチャを削除。存在しなければ False"""
    out_dir = _capture_dir(directory)
    paths = [out_dir / f"{capture_id}.png", out_dir / f"{capture_id}.json"]
    if not any(p.exists() for p in paths):
        return False
    for p in paths:
        p.unlink(missing_ok=True)
    return True


def settings_from_capture(metadata: dict) -> dict:
    """メタデータから apply_config() に渡せる設定を取り出す"""
    return dict(metadata.get("particleSettings", {}))


def save_settings(params, directory=None) -> Path:
    """粒子設定を JSON で保存（次回起動時に load_settings で復元）"""
    out_dir = _capture_dir(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / config.SETTINGS_FILE
    path.write_text(json.dumps(params.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    if config.DEBUG_MODE:
        print(f"[DEBUG] settings saved: {path}")
    return path


def load_settings(directory=None) -> Optional[dict]:
    """
    保存済みの粒子設定を読み込む

    Returns:
        apply_config() に渡せる設定。未保存なら None

    Raises:
        ValueError: JSON として読めない場合（json.JSONDecodeError）
    """
    path = _capture_dir(directory) / config.SETTINGS_FILE
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))
