from dataclasses import dataclass
from typing import Tuple

import pygame

from data.models import RenderModel, SessionResult
from drill.review import clamp_page, format_score, page_bounds, page_count, review_lines


@dataclass(frozen=True)
class Theme:
    bg: Tuple[int, int, int] = (246, 248, 252)
    panel: Tuple[int, int, int] = (255, 255, 255)
    border: Tuple[int, int, int] = (210, 216, 228)
    text: Tuple[int, int, int] = (30, 36, 52)
    muted: Tuple[int, int, int] = (110, 118, 135)
    accent: Tuple[int, int, int] = (40, 110, 230)
    good: Tuple[int, int, int] = (40, 160, 90)
    bad: Tuple[int, int, int] = (220, 70, 60)


class Renderer:
    """
    Renderer отвечает ТОЛЬКО за рисование.
    Он не считает время, не решает правильность, не управляет переходами.
    Ему дают RenderModel / SessionResult — он их рисует.
    """

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.w, self.h = screen.get_size()
        self.theme = Theme()

        # Шрифты (pygame.font должен быть инициализирован через pygame.init())
        self.font_big = pygame.font.SysFont(None, 72)
        self.font_mid = pygame.font.SysFont(None, 42)
        self.font_small = pygame.font.SysFont(None, 28)

        self.card = pygame.Rect(self.w // 8, self.h // 4, self.w * 3 // 4, self.h // 2)

    # -----------------------
    # Базовые методы экрана
    # -----------------------

    def clear(self) -> None:
        self.screen.fill(self.theme.bg)

    def present(self) -> None:
        pygame.display.flip()

    # -----------------------
    # Экраны
    # -----------------------

    def draw_menu(self, seconds_per_question: int, question_count: int) -> None:
        self._text(self.font_mid, "Math drill (addition / subtraction), timed", (40, 40), self.theme.text)
        self._text(
            self.font_small,
            f"{question_count} questions - {seconds_per_question}s per question",
            (40, 100),
            self.theme.muted,
        )
        self._text(self.font_small, "Up / Down: change time per question", (40, 150), self.theme.text)
        self._text(self.font_small, "Space or Enter: start the drill", (40, 185), self.theme.text)
        self._text(self.font_small, "Esc: quit", (40, 220), self.theme.text)

    def draw_drill(self, model: RenderModel) -> None:
        # HUD: номер вопроса, оставшееся время, прогресс
        self._badge(f"Question {model.question_number} / {model.total}", (40, 30), self.theme.accent)
        time_color = self.theme.bad if model.seconds_remaining <= 3 else self.theme.muted
        self._badge(f"Time: {model.seconds_remaining}s", (300, 30), time_color)
        self._progress_bar(model.progress)

        pygame.draw.rect(self.screen, self.theme.panel, self.card, border_radius=12)
        pygame.draw.rect(self.screen, self.theme.border, self.card, width=2, border_radius=12)

        prompt = self.font_big.render(model.prompt, True, self.theme.text)
        self.screen.blit(prompt, prompt.get_rect(center=(self.card.centerx, self.card.y + self.card.height // 3)))

        box = pygame.Rect(0, 0, 200, 56)
        box.center = (self.card.centerx, self.card.y + self.card.height * 2 // 3)
        pygame.draw.rect(self.screen, self.theme.bg, box, border_radius=8)
        pygame.draw.rect(self.screen, self.theme.accent, box, width=2, border_radius=8)
        if model.input_text:
            value = self.font_mid.render(model.input_text, True, self.theme.text)
        else:
            value = self.font_small.render("type a number", True, self.theme.muted)
        self.screen.blit(value, value.get_rect(center=box.center))

        self._text(self.font_small, "Enter: submit answer", (self.card.x, self.card.bottom + 20), self.theme.muted)

    def _review_rows(self) -> int:
        card_h = self.font_small.get_linesize() * 4 + 12
        return max(1, (self.h - 170) // (card_h + 8))

    def review_page_size(self) -> int:
        # две колонки карточек
        return self._review_rows() * 2

    def draw_review(self, result: SessionResult, seconds_per_question: int, page: int = 0) -> None:
        self._text(self.font_mid, "Score", (40, 30), self.theme.muted)
        self._text(self.font_big, format_score(result), (160, 16), self.theme.text)
        self._text(
            self.font_small,
            f"Next drill: {seconds_per_question}s per question (Up / Down)",
            (self.w // 2, 40),
            self.theme.muted,
        )

        col_w = (self.w - 120) // 2
        line_h = self.font_small.get_linesize()
        card_h = line_h * 4 + 12
        rows = self._review_rows()
        per_page = self.review_page_size()
        total = len(result.results)
        blocks = review_lines(result)
        bounds = page_bounds(page, total, per_page)
        for slot, i in enumerate(bounds):
            lines, record = blocks[i], result.results[i]
            col, row = divmod(slot, rows)
            x = 40 + col * (col_w + 40)
            y = 100 + row * (card_h + 8)
            rect = pygame.Rect(x, y, col_w, card_h)
            pygame.draw.rect(self.screen, self.theme.panel, rect, border_radius=8)
            edge = self.theme.good if record.correct else self.theme.bad
            pygame.draw.rect(self.screen, edge, rect, width=2, border_radius=8)
            for j, line in enumerate(lines):
                color = edge if j == 0 else self.theme.text
                self._text(self.font_small, line, (x + 10, y + 6 + j * line_h), color)

        pages = page_count(total, per_page)
        footer = "R or Enter: try again   M: menu   Esc: quit"
        if pages > 1:
            current = clamp_page(page, total, per_page) + 1
            footer = f"Page {current} / {pages} (PageUp / PageDown)   " + footer
        self._text(self.font_small, footer, (40, self.h - 36), self.theme.muted)

    # -----------------------
    # Внутренние функции рисования
    # -----------------------

    def _text(self, font: pygame.font.Font, text: str, pos: Tuple[int, int], color) -> None:
        self.screen.blit(font.render(text, True, color), pos)

    def _badge(self, text: str, pos: Tuple[int, int], color) -> None:
        surf = self.font_small.render(text, True, self.theme.panel)
        rect = surf.get_rect(topleft=(pos[0] + 12, pos[1] + 6))
        pygame.draw.rect(self.screen, color, rect.inflate(24, 12), border_radius=14)
        self.screen.blit(surf, rect)

    def _progress_bar(self, progress: float) -> None:
        outer = pygame.Rect(self.w - 280, 36, 240, 16)
        pygame.draw.rect(self.screen, self.theme.border, outer, border_radius=8)
        fill_w = int(outer.width * max(0.0, min(1.0, progress)))
        if fill_w > 0:
            pygame.draw.rect(self.screen, self.theme.accent, (outer.x, outer.y, fill_w, outer.height), border_radius=8)
