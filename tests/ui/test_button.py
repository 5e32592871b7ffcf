"""UIButtonクラスのテスト"""
import pygame
pygame.init()

from yubisaki.ui.button import UIButton


def _click_event(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, {'pos': pos, 'button': 1})


def _release_event(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, {'pos': pos, 'button': 1})


def _motion_event(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, {'pos': pos, 'rel': (0, 0), 'buttons': (0, 0, 0)})


def test_button_click_inside():
    """ボタン内クリックでon_clickが呼ばれる"""
    clicked = []
    btn = UIButton(pygame.Rect(100, 100, 200, 50), "放出", lambda: clicked.append(True))
    btn.handle_event(_click_event((150, 125)))
    btn.handle_event(_release_event((150, 125)))
    assert clicked == [True]


def test_button_click_outside():
    """ボタン外クリックでon_clickが呼ばれない"""
    clicked = []
    btn = UIButton(pygame.Rect(100, 100, 200, 50), "放出", lambda: clicked.append(True))
    btn.handle_event(_click_event((50, 50)))
    btn.handle_event(_release_event((50, 50)))
    assert clicked == []


def test_button_release_outside_cancels():
    """押した後にボタン外で離すとキャンセル"""
    clicked = []
    btn = UIButton(pygame.Rect(0, 0, 100, 40), "+", lambda: clicked.append(True))
    btn.handle_event(_click_event((50, 20)))
    assert btn.pressed is True
    assert btn.handle_event(_release_event((300, 300))) is False
    assert btn.pressed is False
    assert clicked == []


def test_button_hover():
    btn = UIButton(pygame.Rect(0, 0, 100, 40), "+", lambda: None)
    btn.handle_event(_motion_event((10, 10)))
    assert btn.hovered is True
    btn.handle_event(_motion_event((200, 10)))
    assert btn.hovered is False


def test_toggle_button_flips_selected():
    """toggle=Trueのボタンはクリックごとにselectedが反転する"""
    btn = UIButton(pygame.Rect(0, 0, 100, 40), "骨格", lambda: None, toggle=True)
    assert btn.selected is False
    btn.handle_event(_click_event((50, 20)))
    btn.handle_event(_release_event((50, 20)))
    assert btn.selected is True
    btn.handle_event(_click_event((50, 20)))
    btn.handle_event(_release_event((50, 20)))
    assert btn.selected is False


def test_button_returns_true_on_click():
    """クリック確定時にhandle_eventがTrueを返す"""
    btn = UIButton(pygame.Rect(0, 0, 100, 40), "test", lambda: None)
    btn.handle_event(_click_event((50, 20)))
    result = btn.handle_event(_release_event((50, 20)))
    assert result is True


def test_button_render_does_not_fail():
    surface = pygame.Surface((120, 60))
    btn = UIButton(pygame.Rect(10, 10, 100, 40), "test", lambda: None)
    btn.selected = True
    btn.render(surface)
