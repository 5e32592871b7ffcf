#!/usr/bin/env python3
"""粒子状態ロギングスクリプト（円を描く疑似ハンドでプール使用率を記録）"""

import csv
import sys
import numpy as np
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from yubisaki import config
from yubisaki.entities.hand import HandPose, HandSnapshot
from yubisaki.params import ParticleParams
from yubisaki.simulation import ParticleSimulation


def scripted_hand(frame: int, radius: float = 25.0, period: int = 240) -> HandPose:
    """
    シーン中心を円運動する疑似ハンド（全指オープン）

    Args:
        frame: フレーム番号
        radius: 円の半径（シーン単位）
        period: 1周のフレーム数
    """
    angle = 2.0 * np.pi * frame / period
    cx, cy = radius * np.cos(angle), radius * np.sin(angle)
    # 円運動の接線速度（シーン単位/フレーム）
    speed = 2.0 * np.pi * radius / period
    velocity = (-np.sin(angle) * speed, np.cos(angle) * speed)
    tips = tuple((cx + ox, cy + oy, 0.0) for ox, oy in config.MOUSE_FINGER_OFFSETS)
    return HandPose(tips=tips, finger_extension=(True,) * 5, velocity=velocity)


def run_simulation(frames: int = 3600, output_csv: str = "particle_log.csv", seed: int = 0):
    """
    ヘッドレスでシミュレーションを実行してログを記録

    Args:
        frames: 実行フレーム数
        output_csv: 出力CSVファイル名
        seed: 乱数シード
    """
    simulation = ParticleSimulation(ParticleParams(), seed=seed)

    csv_path = project_root / output_csv
    csv_file = open(csv_path, 'w', newline='')
    csv_writer = csv.writer(csv_file)

    # ヘッダー
    csv_writer.writerow([
        'frame',
        'active_particles',
        'max_particles',
        'usage_percentage',
        'mean_x', 'mean_y',
        'mean_speed',
        'mean_red',
        'mean_lifetime',
    ])

    print(f"シミュレーション開始: {frames}フレーム ({frames / config.FPS:.1f}秒相当)")
    print(f"出力先: {csv_path}")

    saturated_frame = None
    for frame in range(1, frames + 1):
        simulation.submit_snapshot(HandSnapshot(hands=(scripted_hand(frame),), frame=frame))
        status = simulation.step()

        if status is None:
            continue

        pool = simulation.pool
        idx = pool.active_indices()
        if idx.size > 0:
            mean_x, mean_y = pool.positions[idx, :2].mean(axis=0)
            mean_speed = np.linalg.norm(pool.velocities[idx, :2], axis=1).mean()
            mean_red = pool.colors[idx, 0].mean()
            mean_lifetime = pool.lifetimes[idx].mean()
        else:
            mean_x = mean_y = mean_speed = mean_red = mean_lifetime = 0.0

        csv_writer.writerow([
            frame,
            status.active_particles,
            status.max_particles,
            f"{status.usage_percentage:.2f}",
            f"{mean_x:.4f}", f"{mean_y:.4f}",
            f"{mean_speed:.4f}",
            f"{mean_red:.4f}",
            f"{mean_lifetime:.1f}",
        ])

        if saturated_frame is None and status.active_particles == status.max_particles:
            saturated_frame = frame
            print(f"  frame={frame}: プールが飽和（以降はランダム上書き）")

    csv_file.close()
    print(f"\nシミュレーション完了")
    print(f"最終アクティブ粒子数: {simulation.pool.active_count}/{simulation.pool.capacity}")
    print(f"ログファイル: {csv_path}")

    return csv_path


if __name__ == "__main__":
    frames = int(sys.argv[1]) if len(sys.argv) > 1 else 3600
    csv_path = run_simulation(frames=frames)
    print(f"\n解析を開始するには:")
    print(f"  python scripts/analyze_particles.py {csv_path}")
