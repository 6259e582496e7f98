from typing import List, Optional, Tuple

import pygame


ACTION_DIGIT = "DIGIT"
ACTION_BACKSPACE = "BACKSPACE"
ACTION_SUBMIT = "SUBMIT"
ACTION_UP = "UP"
ACTION_DOWN = "DOWN"
ACTION_START = "START"
ACTION_RETRY = "RETRY"
ACTION_PAGE_UP = "PAGE_UP"
ACTION_PAGE_DOWN = "PAGE_DOWN"
ACTION_MENU = "MENU"

Action = Tuple[str, Optional[str]]


class InputManager:
    """
    InputManager — прослойка между pygame и нашей логикой.

    Идея:
    - pygame шлёт события (event)
    - мы смотрим только на KEYDOWN (нажатие)
    - превращаем клавишу в действие: ("DIGIT", "7"), ("SUBMIT", None), ...
    - сцена в каждом кадре забирает накопленные действия через poll_actions()
    """

    def __init__(self):
        # Действия, которые ещё не были забраны через poll_actions()
        self._pending: List[Action] = []

        # Клавиши цифрового блока -> цифра
        self.keypad_digits = {
            pygame.K_KP0: "0",
            pygame.K_KP1: "1",
            pygame.K_KP2: "2",
            pygame.K_KP3: "3",
            pygame.K_KP4: "4",
            pygame.K_KP5: "5",
            pygame.K_KP6: "6",
            pygame.K_KP7: "7",
            pygame.K_KP8: "8",
            pygame.K_KP9: "9",
        }

        # Служебные клавиши -> действие
        self.key_to_action = {
            pygame.K_RETURN: ACTION_SUBMIT,
            pygame.K_KP_ENTER: ACTION_SUBMIT,
            pygame.K_BACKSPACE: ACTION_BACKSPACE,
            pygame.K_UP: ACTION_UP,
            pygame.K_DOWN: ACTION_DOWN,
            pygame.K_SPACE: ACTION_START,
            pygame.K_r: ACTION_RETRY,
            pygame.K_PAGEUP: ACTION_PAGE_UP,
            pygame.K_PAGEDOWN: ACTION_PAGE_DOWN,
            pygame.K_m: ACTION_MENU,
        }

    def translate(self, event) -> Optional[Action]:
        if event.type != pygame.KEYDOWN:
            return None

        key = event.key
        if key in self.keypad_digits:
            return ACTION_DIGIT, self.keypad_digits[key]
        if key in self.key_to_action:
            return self.key_to_action[key], None

        # Цифры основного ряда: берём символ, чтобы работала любая раскладка
        char = getattr(event, "unicode", "") or ""
        if len(char) == 1 and char.isascii() and char.isdigit():
            return ACTION_DIGIT, char
        return None

    def process_pygame_event(self, event) -> None:
        """
        Кормим сюда события pygame из app/scene.
        """
        action = self.translate(event)
        if action is not None:
            self._pending.append(action)

    def poll_actions(self) -> List[Action]:
        """
        Возвращает все накопленные действия и очищает очередь,
        чтобы они не "залипали" на следующий кадр.
        """
        actions = self._pending
        self._pending = []
        return actions

    def reset(self) -> None:
        """
        Явно сбрасывает ввод (перед новой сессией, при смене экрана).
        """
        self._pending = []
