"""カメラ + MediaPipe Hands による手の検出"""

from typing import Optional

import cv2
import mediapipe as mp

from yubisaki import config
from yubisaki.entities.hand import HandSnapshot
from yubisaki.input.landmarks import HandVelocityEstimator, snapshot_from_landmarks


class CameraHandTracker:
    """
    Webカメラから手を検出し、スナップショットを生成する

    検出は update_interval フレームに1回だけ行う（検出はシミュレーション
    より遅い周期で十分）。それ以外のフレームでは None を返すので、
    呼び出し側は直前のスナップショットを使い続ければよい。
    """

    def __init__(
        self,
        camera_index: int = 0,
        max_hands: int = config.MAX_HANDS,
        confidence: float = config.HAND_CONFIDENCE_THRESHOLD,
        update_interval: int = config.HAND_UPDATE_INTERVAL,
    ):
        self.camera_index = camera_index
        self.max_hands = max_hands
        self.confidence = confidence
        self.update_interval = update_interval

        self.capture = None
        self.hands = None
        self.estimator = HandVelocityEstimator()

    def start(self):
        """カメラと検出器を開く"""
        self.capture = cv2.VideoCapture(self.camera_index)
        self.capture.set(cv2.CAP_PROP_FRAME_WIDTH, config.CAMERA_WIDTH)
        self.capture.set(cv2.CAP_PROP_FRAME_HEIGHT, config.CAMERA_HEIGHT)
        if not self.capture.isOpened():
            self.capture.release()
            self.capture = None
            raise RuntimeError(f"カメラを開けません (index={self.camera_index})")

        self.hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=self.max_hands,
            model_complexity=1,
            min_detection_confidence=self.confidence,
            min_tracking_confidence=self.confidence,
        )
        self.estimator.reset()
        if config.DEBUG_MODE:
            print(f"[DEBUG] camera hand tracker started (index={self.camera_index})")

    def stop(self):
        if self.hands is not None:
            self.hands.close()
            self.hands = None
        if self.capture is not None:
            self.capture.release()
            self.capture = None

    @property
    def is_running(self) -> bool:
        return self.capture is not None

    def poll(self, frame: int) -> Optional[HandSnapshot]:
        """
        カメラ画像を読み、検出フレームなら手を検出する

        Returns:
            検出フレームではスナップショット（手がなければ空）、
            それ以外（またはカメラ読み込み失敗）では None
        """
        if not self.is_running:
            return None

        ok, frame_bgr = self.capture.read()
        if not ok:
            return None

        if frame % self.update_interval != 0:
            return None

        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return HandSnapshot(hands=(), frame=frame)

        handedness = None
        if results.multi_handedness:
            handedness = [h.classification[0].label for h in results.multi_handedness]

        return snapshot_from_landmarks(
            [hand.landmark for hand in results.multi_hand_landmarks],
            frame=frame,
            handedness=handedness,
            estimator=self.estimator,
        )
