import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from config.settings import MAX_SECONDS, DrillConfig, WindowConfig
from drill.app import SCREEN_DRILL, SCREEN_MENU, SCREEN_REVIEW, DrillApp


def _key(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode)


def _press(app, *keys):
    for key in keys:
        app.input_manager.process_pygame_event(_key(key))


@pytest.fixture
def make_app():
    apps = []

    def _make(**drill):
        app = DrillApp(WindowConfig(), DrillConfig(**drill))
        apps.append(app)
        return app

    yield _make
    for app in apps:
        if app.scene is not None:
            app.scene.teardown()
    pygame.quit()


def _finish_blank(app, now_ms=100):
    count = app.drill_config.question_count
    _press(app, *([pygame.K_RETURN] * count))
    app.scene.update(now_ms)


def test_menu_to_drill_to_review(make_app):
    app = make_app(question_count=2, seconds_per_question=5, seed=1)
    assert app.screen_name == SCREEN_MENU

    _press(app, pygame.K_SPACE)
    app._handle_menu_actions(0)
    assert app.screen_name == SCREEN_DRILL
    assert app.scene.session.render_model().total == 2

    _finish_blank(app)
    assert app.screen_name == SCREEN_REVIEW
    assert app.last_result.total == 2
    assert app.last_result.score == 0
    app._render()


def test_menu_seconds_are_clamped(make_app):
    app = make_app(seconds_per_question=2)
    _press(app, pygame.K_DOWN, pygame.K_DOWN, pygame.K_DOWN)
    app._handle_menu_actions(0)
    assert app.drill_config.seconds_per_question == 1

    app.drill_config = app.drill_config.with_seconds(MAX_SECONDS)
    _press(app, pygame.K_UP)
    app._handle_menu_actions(0)
    assert app.drill_config.seconds_per_question == MAX_SECONDS


def test_seconds_adjustable_on_review_and_used_by_retry(make_app):
    app = make_app(question_count=1, seconds_per_question=10)
    _press(app, pygame.K_RETURN)
    app._handle_menu_actions(0)
    _finish_blank(app)
    assert app.screen_name == SCREEN_REVIEW

    _press(app, pygame.K_UP)
    app._handle_menu_actions(200)
    assert app.drill_config.seconds_per_question == 11

    texts = []
    app.renderer._text = lambda font, text, pos, color: texts.append(text)
    app._render()
    assert any("11s per question" in t for t in texts)

    _press(app, pygame.K_r)
    app._handle_menu_actions(300)
    assert app.screen_name == SCREEN_DRILL
    assert app.scene.session.render_model().seconds_remaining == 11


def test_review_back_to_menu(make_app):
    app = make_app(question_count=1)
    _press(app, pygame.K_RETURN)
    app._handle_menu_actions(0)
    _finish_blank(app)

    _press(app, pygame.K_m)
    app._handle_menu_actions(200)
    assert app.screen_name == SCREEN_MENU


def test_review_pages_show_every_record(make_app):
    app = make_app(question_count=15, seed=2)
    _press(app, pygame.K_RETURN)
    app._handle_menu_actions(0)
    _finish_blank(app)
    assert app.screen_name == SCREEN_REVIEW

    texts = []
    app.renderer._text = lambda font, text, pos, color: texts.append(text)
    per_page = app.renderer.review_page_size()
    pages = -(-15 // per_page)
    for _ in range(pages):
        app._render()
        _press(app, pygame.K_PAGEDOWN)
        app._handle_menu_actions(500)

    drawn = {t.split()[0] for t in texts if t.startswith("#")}
    assert drawn == {f"#{i}" for i in range(1, 16)}

    # дальше последней страницы не листается
    assert app.review_page == pages - 1
    _press(app, pygame.K_PAGEUP)
    app._handle_menu_actions(600)
    assert app.review_page == max(0, pages - 2)


def test_review_page_resets_on_new_result(make_app):
    app = make_app(question_count=30)
    _press(app, pygame.K_RETURN)
    app._handle_menu_actions(0)
    _finish_blank(app)
    _press(app, pygame.K_PAGEDOWN)
    app._handle_menu_actions(200)
    assert app.review_page == 1

    _press(app, pygame.K_RETURN)
    app._handle_menu_actions(300)
    _finish_blank(app, now_ms=400)
    assert app.review_page == 0


def test_quit_mid_drill_tears_down_session(make_app):
    app = make_app(question_count=3)
    _press(app, pygame.K_SPACE)
    app._handle_menu_actions(0)
    session = app.scene.session
    assert session.is_active

    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.run()

    assert not app.running
    assert not session.is_active
    assert app.scene.scheduler.active_count() == 0
