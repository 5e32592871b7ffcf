"""Yubisaki メインエントリーポイント"""

import os
import sys

import pygame

from yubisaki import config
from yubisaki.effects.particle_effects import FountainEffect, VortexEffect
from yubisaki.input.mouse_hand import MouseHandInput
from yubisaki.params import ParticleConfigError
from yubisaki.rendering.capture import load_settings, save_capture, save_settings
from yubisaki.rendering.hand_overlay import HandOverlayRenderer
from yubisaki.rendering.particle_view import ParticleViewRenderer
from yubisaki.simulation import ParticleSimulation
from yubisaki.ui.settings_panel import SettingsPanel

# 日本語フォント探索
pygame.font.init()


def _find_jp_font_path():
    candidates = [
        "/System/Library/Fonts/Hiragino Sans W3.ttc",
        "/System/Library/Fonts/ヒラギノ角ゴシック W3.ttc",
        "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
        "C:/Windows/Fonts/meiryo.ttc",
    ]
    for path in candidates:
        if os.path.exists(path):
            return path

    # フォールバック: システムフォントマッチング
    for name in ("hiraginosans", "notosanscjkjp", "meiryo", "takaoexgothic"):
        path = pygame.font.match_font(name)
        if path:
            return path
    return None


_JP_FONT_PATH = _find_jp_font_path()


def _get_jp_font(size: int) -> pygame.font.Font:
    """日本語フォントを取得"""
    if _JP_FONT_PATH:
        return pygame.font.Font(_JP_FONT_PATH, size)
    return pygame.font.Font(None, size)


def _open_camera_tracker():
    """--camera 指定時のみカメラトラッカーを起動（OpenCV / MediaPipe が必要）"""
    from yubisaki.input.camera import CameraHandTracker

    tracker = CameraHandTracker()
    tracker.start()
    return tracker


def main():
    """メインループ"""
    use_camera = "--camera" in sys.argv

    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT))
    pygame.display.set_caption("Yubisaki: Fingertip Particles")
    clock = pygame.time.Clock()
    view_rect = screen.get_rect()

    simulation = ParticleSimulation()

    # 入力
    mouse_hand = MouseHandInput(config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
    camera = _open_camera_tracker() if use_camera else None

    # レンダラー・UI
    particle_renderer = ParticleViewRenderer()
    hand_renderer = HandOverlayRenderer()
    font_ui = _get_jp_font(20)

    # 設定変更はフレーム間に適用するため、ここでは溜めるだけ
    pending_changes = {}

    def _on_setting_changed(key, value):
        pending_changes[key] = value

    app_state = {
        'paused': False,
        'save_requested': False,
        'message': None,
        'message_timer': 0,
    }

    def _show_message(text):
        app_state['message'] = text
        app_state['message_timer'] = config.FPS * 2

    def _on_toggle_skeleton(visible):
        hand_renderer.show_skeleton = visible

    panel = SettingsPanel((20, 80), _on_setting_changed,
                          on_reset=lambda: pending_changes.update(panel.changes()),
                          on_save=lambda: app_state.update(save_requested=True),
                          on_toggle_skeleton=_on_toggle_skeleton,
                          font_loader=_get_jp_font)

    # 前回保存した設定を復元
    try:
        saved = load_settings()
        if saved is not None:
            simulation.apply_config(saved)
            panel.set_values(simulation.params)
    except ValueError as e:
        _show_message(f"保存済み設定を読み込めません: {e}")

    running = True
    while running:
        # --- イベント処理 ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue
            if panel.handle_event(event):
                continue
            if event.type != pygame.KEYDOWN:
                continue

            cursor = mouse_hand.get_position()
            if event.key == pygame.K_ESCAPE:
                running = False
            elif event.key == pygame.K_SPACE:
                app_state['paused'] = not app_state['paused']
            elif event.key == pygame.K_r:
                simulation.reset()
            elif event.key == pygame.K_c:
                path = save_capture(screen, simulation)
                _show_message(f"キャプチャ保存: {path.name}")
            elif event.key == pygame.K_e:
                simulation.particle_effects.explosion(cursor[0], cursor[1])
            elif event.key == pygame.K_b:
                simulation.particle_effects.burst(cursor[0], cursor[1])
            elif event.key == pygame.K_f:
                simulation.add_effect(FountainEffect(cursor[0], cursor[1]))
            elif event.key == pygame.K_v:
                simulation.add_effect(VortexEffect(cursor[0], cursor[1]))
            elif event.key == pygame.K_t:
                simulation.particle_effects.trail(simulation.mailbox.latest())
            elif event.key == pygame.K_h:
                hand_renderer.show_skeleton = not hand_renderer.show_skeleton
                panel.skeleton_button.selected = hand_renderer.show_skeleton
            elif event.key == pygame.K_TAB:
                panel.visible = not panel.visible

        # --- 設定の適用（フレーム間） ---
        if pending_changes:
            try:
                simulation.apply_config(pending_changes)
            except ParticleConfigError as e:
                _show_message(f"設定エラー: {e}")
            panel.set_values(simulation.params)
            pending_changes.clear()

        if app_state['save_requested']:
            path = save_settings(simulation.params)
            _show_message(f"設定を保存: {path.name}")
            app_state['save_requested'] = False

        # --- 入力 ---
        next_frame = simulation.frame_count + 1
        mouse_hand.update()
        if camera is not None:
            snapshot = camera.poll(next_frame)
            if snapshot is not None:
                simulation.submit_snapshot(snapshot)
        elif panel.contains(pygame.mouse.get_pos()):
            simulation.submit_snapshot(None)
        else:
            simulation.submit_snapshot(mouse_hand.to_snapshot(next_frame))

        # --- 更新 ---
        if not app_state['paused']:
            simulation.step()

        # --- 描画 ---
        screen.fill(config.COLOR_BACKGROUND)
        particle_renderer.render(screen, view_rect, simulation.pool, simulation.params)
        hand_renderer.render(screen, view_rect, simulation.mailbox.latest())
        panel.render(screen)

        status = simulation.last_status or simulation.status()
        hud = f"粒子: {status.active_particles}/{status.max_particles} ({status.usage_percentage:.1f}%)"
        if config.SHOW_FPS:
            hud = f"FPS: {clock.get_fps():.0f}  " + hud
        screen.blit(font_ui.render(hud, True, (255, 255, 255)), (20, 20))

        if app_state['paused']:
            text = _get_jp_font(48).render("PAUSED", True, (255, 255, 255))
            screen.blit(text, (view_rect.centerx - text.get_width() // 2, view_rect.centery))

        if app_state['message_timer'] > 0:
            app_state['message_timer'] -= 1
            screen.blit(font_ui.render(app_state['message'], True, (255, 220, 80)),
                        (20, config.SCREEN_HEIGHT - 40))

        pygame.display.flip()
        clock.tick(config.FPS)

    if camera is not None:
        camera.stop()
    pygame.quit()


if __name__ == "__main__":
    main()
