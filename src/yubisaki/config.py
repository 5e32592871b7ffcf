"""Yubisaki 設定・定数"""

# 画面設定
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60

# シーン座標系（原点中心、x右・y下・z手前）
SCENE_EXTENT = 100.0   # 表示領域の一辺（シーン単位、-50〜+50）
OFFSCREEN_Z = -1000.0  # 非アクティブ粒子の深度（画面外センチネル）

# 粒子システム デフォルト値
PARTICLE_COUNT = 1000          # 粒子の最大数（プール容量）
PARTICLE_SIZE = 0.5            # 粒子の基本サイズ（描画専用）
PARTICLE_MAX_SPEED = 2.0       # 初速の上限（シーン単位/フレーム）
PARTICLE_LIFETIME = 1500       # 粒子の寿命（フレーム数）
PARTICLE_EMISSION_RATE = 5     # 指先1本あたりの最大放出数（放出フレームごと）
PARTICLE_GRAVITY = 0.03        # 重力（y方向の速度増分/フレーム）
PARTICLE_FRICTION = 0.98       # 摩擦係数（速度倍率/フレーム、(0, 1]）
PARTICLE_BOUNCE_STRENGTH = 0.85  # 反発係数（予約: 境界衝突は未実装）
PARTICLE_INTERACTION_RADIUS = 10.0  # 指との相互作用半径（シーン単位）
PARTICLE_COLORS = (
    "#ff4444", "#44ff44", "#4444ff", "#ffff44", "#ff44ff",
)

# 放出・寿命
EMISSION_INTERVAL = 2          # 2フレームに1回放出（偶数フレームのみ）
FADE_FRAMES = 30               # 寿命の最後30フレームでフェードアウト
INITIAL_Z_JITTER = 0.2         # 初速z成分の幅（±0.1）

# 指との相互作用（力場）
INTERACTION_STRENGTH = 0.5         # 中心での引力の最大値
HAND_VELOCITY_TRANSFER = 0.1       # 手の速度の伝達率（10%）
INTERACTION_COLOR_CHANNEL = 0      # 接触時に強調するチャンネル（0=R）
INTERACTION_COLOR_BOOST = 0.05     # 接触1回あたりの色の増分
INTERACTION_LIFETIME_BONUS = 5     # 接触1回あたりの寿命延長（フレーム）
INTERACTION_DISTANCE_EPSILON = 1e-6  # ゼロ距離ガード

# ステータス通知
STATUS_INTERVAL = 30           # 30フレームに1回

# 手のトラッキング設定
MAX_HANDS = 2
HAND_CONFIDENCE_THRESHOLD = 0.7
HAND_UPDATE_INTERVAL = 10          # 検出は10フレームに1回
FINGER_EXTENSION_THRESHOLD = 0.05  # 正規化座標での指先-付け根距離
HAND_HISTORY_LENGTH = 10           # 速度推定用の履歴数
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480

# MediaPipe ランドマーク番号
FINGER_TIP_INDICES = (4, 8, 12, 16, 20)  # 親指、人差し指、中指、薬指、小指
PALM_INDICES = (0, 1, 5, 9, 13, 17)      # 手首と各指の第1関節

# マウス入力（疑似ハンド）の指先配置（カーソルからのオフセット、シーン単位）
MOUSE_FINGER_OFFSETS = (
    (-6.0, -2.0),
    (-3.0, -7.0),
    (0.0, -8.0),
    (3.0, -7.0),
    (6.0, -5.0),
)
MOUSE_VELOCITY_DECAY = 0.9

# レンダリング
PARTICLE_RADIUS_PX_PER_SIZE = 4.0  # size 1.0 あたりの描画半径（px）
COLOR_BACKGROUND = (0, 0, 0)
COLOR_SKELETON = "#3498db"
COLOR_TIP_EXTENDED = (255, 255, 255)
JOINT_RADIUS = 5
SHOW_HAND_SKELETON = True
SHOW_FPS = True

# キャプチャ保存先
CAPTURE_DIR = "particle-captures"
SETTINGS_FILE = "particle-settings.json"  # 保存した粒子設定（CAPTURE_DIR 内）

# パレット編集
PALETTE_MAX_COLORS = 8

# 設定パネルのスライダー範囲 (最小, 最大, ステップ)
SETTINGS_RANGES = {
    "count": (100, 5000, 100),
    "size": (0.1, 3.0, 0.1),
    "gravity": (-0.1, 0.1, 0.01),
    "friction": (0.9, 1.0, 0.01),
    "lifetime": (100, 3000, 100),
    "emissionRate": (1, 20, 1),
}

# 設定パネルの表示名（日本語）
SETTINGS_LABELS_JP = {
    "count": "粒子数",
    "size": "粒子サイズ",
    "gravity": "重力",
    "friction": "摩擦",
    "lifetime": "寿命",
    "emissionRate": "放出レート",
}

# デバッグ出力
DEBUG_MODE = False
