#!/usr/bin/env python3
"""粒子ログ解析スクリプト（プール使用率と相互作用の効果をグラフ化）"""

import sys
import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path


def analyze_particle_log(csv_path: str, output_png: str = "particle_analysis.png"):
    """
    プール使用率・速度・色の推移を解析

    Args:
        csv_path: ログCSVファイルのパス
        output_png: 出力グラフのファイル名
    """
    print(f"ログファイル読込: {csv_path}")
    df = pd.read_csv(csv_path)

    print(f"\n=== データサマリー ===")
    print(f"総レコード数: {len(df)}")
    print(f"最終フレーム: {df['frame'].iloc[-1]}")
    print(f"プール容量: {df['max_particles'].iloc[0]}")

    saturated = df[df['active_particles'] >= df['max_particles']]
    if len(saturated) > 0:
        print(f"飽和開始フレーム: {saturated['frame'].iloc[0]}")
        print(f"飽和していた割合: {len(saturated) / len(df) * 100:.1f}%")
    else:
        print(f"最大使用率: {df['usage_percentage'].max():.1f}%（飽和なし）")

    print(f"\n=== 統計サマリー ===")
    print(f"平均速度: {df['mean_speed'].mean():.4f} 単位/フレーム")
    print(f"平均R成分: {df['mean_red'].mean():.3f}（指との接触で上昇）")
    print(f"平均残り寿命: {df['mean_lifetime'].mean():.1f} フレーム")

    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    axes[0].plot(df['frame'], df['usage_percentage'], color='tab:blue')
    axes[0].axhline(100.0, color='tab:red', linestyle='--', linewidth=1, label='飽和')
    axes[0].set_ylabel('usage [%]')
    axes[0].set_title('Pool usage')
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(df['frame'], df['mean_speed'], color='tab:green')
    axes[1].set_ylabel('mean speed [unit/frame]')
    axes[1].grid(True, alpha=0.3)

    axes[2].plot(df['frame'], df['mean_red'], color='tab:red', label='mean red')
    axes[2].set_ylabel('mean red')
    axes[2].set_xlabel('frame')
    axes[2].grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_png, dpi=150)
    print(f"\nグラフを保存: {output_png}")
    plt.show()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        csv_path = Path(__file__).parent.parent / "particle_log.csv"
    else:
        csv_path = Path(sys.argv[1])

    if not csv_path.exists():
        print(f"エラー: ファイルが見つかりません: {csv_path}")
        print(f"\n先にログを生成してください:")
        print(f"  python scripts/log_particles.py")
        sys.exit(1)

    analyze_particle_log(str(csv_path))
