"""Application window: menu bar, world view and floating tool windows."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Callable

import pygame

from factori.scene import Scene

_log = logging.getLogger(__name__)

TITLE = "Factori"
MENU_HEIGHT = 24
MENU_WIDTH = 80
MENU_ITEM_WIDTH = 160
BAR_HEIGHT = 24
SELECTOR_WIDTH = 400
SELECTOR_MARGIN = 50
FRAME_RATE = 60
SETTINGS_STATUS = "!!!WIP!!!"

BACKGROUND_COLOR = (0, 0, 0)
MENU_COLOR = (30, 30, 32)
MENU_ACTIVE_COLOR = (60, 60, 66)
WINDOW_COLOR = (45, 45, 48)
BAR_COLOR = (30, 30, 30)
BORDER_COLOR = (90, 90, 96)
TEXT_COLOR = (230, 230, 230)


class ActionWindow:
    """A frameless floating window with a title bar holding a close button."""

    def __init__(self, title: str = "", rect=None, stays_on_top: bool = False) -> None:
        self.title = title
        self.rect = pygame.Rect(rect) if rect is not None else pygame.Rect(0, 0, 200, 150)
        self.stays_on_top = stays_on_top
        self.visible = True
        self.dragging = False
        self.closing: list[Callable[[], None]] = []
        self._drag_offset = (0, 0)

    def close(self) -> bool:
        """Notify ``closing`` listeners and hide; False if already closed."""
        if not self.visible:
            return False
        for callback in list(self.closing):
            callback()
        self.visible = False
        self.dragging = False
        return True

    def contains(self, pos) -> bool:
        return self.visible and self.rect.collidepoint(pos)

    def close_button_rect(self) -> pygame.Rect:
        """The close button sits at the right end of the title bar."""
        return pygame.Rect(
            self.rect.right - 1 - BAR_HEIGHT, self.rect.top + 1, BAR_HEIGHT, BAR_HEIGHT
        )

    def handle_event(self, event) -> bool:
        """Handle a mouse event in view coordinates; True when it was consumed."""
        if not self.visible:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN:
            if not self.rect.collidepoint(event.pos):
                return False
            if event.button == 1:
                if self.close_button_rect().collidepoint(event.pos):
                    self.close()
                    return True
                self.dragging = True
                self._drag_offset = (
                    event.pos[0] - self.rect.left,
                    event.pos[1] - self.rect.top,
                )
            return True
        if event.type == pygame.MOUSEMOTION:
            if self.dragging:
                self.rect.topleft = (
                    event.pos[0] - self._drag_offset[0],
                    event.pos[1] - self._drag_offset[1],
                )
                return True
            return self.rect.collidepoint(event.pos)
        if event.type == pygame.MOUSEBUTTONUP:
            was_dragging = self.dragging
            self.dragging = False
            return was_dragging or self.rect.collidepoint(event.pos)
        return False

    def _draw(self, surface: pygame.Surface, font=None) -> None:
        pygame.draw.rect(surface, WINDOW_COLOR, self.rect)
        pygame.draw.rect(surface, BORDER_COLOR, self.rect, 1)
        bar = pygame.Rect(self.rect.left + 1, self.rect.top + 1, self.rect.width - 2, BAR_HEIGHT)
        pygame.draw.rect(surface, BAR_COLOR, bar)
        if font is not None:
            text = font.render(self.title, True, TEXT_COLOR)
            surface.blit(text, (bar.left + 6, bar.centery - text.get_height() // 2))
        cross = self.close_button_rect().inflate(-10, -10)
        pygame.draw.line(surface, TEXT_COLOR, cross.topleft, cross.bottomright, 2)
        pygame.draw.line(surface, TEXT_COLOR, cross.bottomleft, cross.topright, 2)


class MainView:
    """The world scene with floating tool windows laid over it."""

    def __init__(self, scene: Scene | None = None, width: int = 800, height: int = 600) -> None:
        self.width = width
        self.height = max(1, height)
        self.scene = scene if scene is not None else Scene(width, self.height)
        self.scene.resize(self.width, self.height)
        self.build_selector: ActionWindow | None = None
        self.keyboard_grabbed = True

    def selector_geometry(self) -> tuple[int, int, int, int]:
        """Rectangle (x, y, width, height) of the build selector."""
        return (
            self.width - SELECTOR_WIDTH - SELECTOR_MARGIN,
            self.height // 2 // 2,
            SELECTOR_WIDTH,
            self.height // 2,
        )

    def exec_build_selector(self) -> ActionWindow:
        """Open the build selector, or return the one already open."""
        if self.build_selector is not None and self.build_selector.visible:
            self.build_selector.rect = pygame.Rect(self.selector_geometry())
            return self.build_selector

        selector = ActionWindow("Selector", self.selector_geometry(), stays_on_top=True)

        def on_closing() -> None:
            if self.build_selector is selector:
                self.build_selector = None
            self.scene.edit_mode = False
            self.keyboard_grabbed = True

        selector.closing.append(on_closing)
        self.build_selector = selector
        return selector

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = max(1, height)
        self.scene.resize(self.width, self.height)
        if self.build_selector is not None:
            self.build_selector.rect = pygame.Rect(self.selector_geometry())

    def _update_hover(self, pos) -> None:
        selector = self.build_selector
        over = selector is not None and selector.contains(pos)
        self.keyboard_grabbed = not over

    def _render(self, surface: pygame.Surface, font=None) -> None:
        self.scene.render(surface)
        if self.build_selector is not None and self.build_selector.visible:
            self.build_selector._draw(surface, font)


@dataclass
class _MenuAction:
    text: str
    callback: Callable[[], None] | None = None
    checkable: bool = False
    checked: bool = False

    def trigger(self) -> None:
        if self.callback is not None:
            self.callback()


@dataclass
class _Menu:
    title: str
    actions: list[_MenuAction] = field(default_factory=list)


class MainWindow:
    """Top-level window: a menu bar above the world view."""

    title = TITLE

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        scene: Scene | None = None,
        fullscreen: bool = True,
    ) -> None:
        self.width = width
        self.height = height
        self.fullscreen = fullscreen
        self.view = MainView(scene, width, height - MENU_HEIGHT)
        self.running = True
        self.active_menu: int | None = None
        self.status: str = ""

        self.build_action = _MenuAction("Build", self.toggle_build, checkable=True)
        self.menus = [
            _Menu("System", [
                _MenuAction("Settings", self._settings),
                _MenuAction("Shutdown", self._shutdown),
            ]),
            _Menu("Game", [
                _MenuAction("Editor"),
                self.build_action,
            ]),
        ]

    def _settings(self) -> str:
        """Settings are not available yet; report that in the menu bar."""
        self.status = SETTINGS_STATUS
        _log.debug(self.status)
        return self.status

    def _shutdown(self) -> None:
        self.running = False

    def toggle_build(self) -> None:
        """Flip build mode: open the selector with the grid, or close it."""
        self.build_action.checked = not self.build_action.checked
        if self.build_action.checked:
            self.view.scene.edit_mode = True
            selector = self.view.exec_build_selector()
            if self._on_selector_closed not in selector.closing:
                selector.closing.append(self._on_selector_closed)
        elif self.view.build_selector is not None:
            self.view.build_selector.close()

    def _on_selector_closed(self) -> None:
        self.build_action.checked = False

    @staticmethod
    def _menu_rect(index: int) -> pygame.Rect:
        return pygame.Rect(index * MENU_WIDTH, 0, MENU_WIDTH, MENU_HEIGHT)

    @staticmethod
    def _item_rect(menu_index: int, item_index: int) -> pygame.Rect:
        return pygame.Rect(
            menu_index * MENU_WIDTH, MENU_HEIGHT * (item_index + 1), MENU_ITEM_WIDTH, MENU_HEIGHT
        )

    def _handle_menu_click(self, pos) -> bool:
        for index in range(len(self.menus)):
            if self._menu_rect(index).collidepoint(pos):
                self.active_menu = None if self.active_menu == index else index
                return True
        if self.active_menu is not None:
            menu_index = self.active_menu
            self.active_menu = None
            for item_index, action in enumerate(self.menus[menu_index].actions):
                if self._item_rect(menu_index, item_index).collidepoint(pos):
                    action.trigger()
                    return True
            return True
        return pos[1] < MENU_HEIGHT

    @staticmethod
    def _to_view(pos) -> tuple[int, int]:
        return (pos[0], pos[1] - MENU_HEIGHT)

    def _resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.view.resize(width, height - MENU_HEIGHT)

    def handle_event(self, event) -> None:
        """Dispatch one pygame event to the menu, tool windows or scene."""
        scene = self.view.scene
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self._resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_F1:
                self.active_menu = 0
            elif event.key == pygame.K_ESCAPE and self.active_menu is not None:
                self.active_menu = None
            elif self.view.keyboard_grabbed:
                scene.key_press(event.key)
        elif event.type == pygame.KEYUP:
            scene.key_release(event.key)
        elif event.type == pygame.MOUSEMOTION:
            view_pos = self._to_view(event.pos)
            selector = self.view.build_selector
            moved = pygame.event.Event(pygame.MOUSEMOTION, pos=view_pos)
            if selector is not None and selector.dragging:
                selector.handle_event(moved)
            self.view._update_hover(view_pos)
            scene.mouse_move(*view_pos)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if (event.pos[1] < MENU_HEIGHT or self.active_menu is not None) and \
                    self._handle_menu_click(event.pos):
                return
            view_pos = self._to_view(event.pos)
            selector = self.view.build_selector
            pressed = pygame.event.Event(
                pygame.MOUSEBUTTONDOWN, pos=view_pos, button=event.button
            )
            if selector is not None and selector.handle_event(pressed):
                return
            scene.mouse_move(*view_pos)
            scene.mouse_press()
        elif event.type == pygame.MOUSEBUTTONUP:
            selector = self.view.build_selector
            if selector is not None:
                released = pygame.event.Event(
                    pygame.MOUSEBUTTONUP, pos=self._to_view(event.pos), button=event.button
                )
                selector.handle_event(released)

    def _tick(self) -> None:
        self.view.scene.update_movement(self.view.keyboard_grabbed)

    def _draw_menu(self, screen: pygame.Surface, font) -> None:
        pygame.draw.rect(screen, MENU_COLOR, pygame.Rect(0, 0, self.width, MENU_HEIGHT))
        for index, menu in enumerate(self.menus):
            rect = self._menu_rect(index)
            if index == self.active_menu:
                pygame.draw.rect(screen, MENU_ACTIVE_COLOR, rect)
            text = font.render(menu.title, True, TEXT_COLOR)
            screen.blit(text, text.get_rect(center=rect.center))
        if self.status:
            text = font.render(self.status, True, TEXT_COLOR)
            screen.blit(
                text, (self.width - text.get_width() - 8, (MENU_HEIGHT - text.get_height()) // 2)
            )
        if self.active_menu is None:
            return
        for item_index, action in enumerate(self.menus[self.active_menu].actions):
            rect = self._item_rect(self.active_menu, item_index)
            pygame.draw.rect(screen, MENU_COLOR, rect)
            pygame.draw.rect(screen, BORDER_COLOR, rect, 1)
            label = f"[{'x' if action.checked else ' '}] {action.text}" if action.checkable \
                else action.text
            text = font.render(label, True, TEXT_COLOR)
            screen.blit(text, (rect.left + 8, rect.centery - text.get_height() // 2))

    def _render(self, screen: pygame.Surface, font) -> None:
        screen.fill(BACKGROUND_COLOR)
        area = pygame.Rect(0, MENU_HEIGHT, self.width, max(1, self.height - MENU_HEIGHT))
        area = area.clip(screen.get_rect())
        if area.width > 0 and area.height > 0:
            self.view._render(screen.subsurface(area), font)
        self._draw_menu(screen, font)

    def run(self) -> int:
        """Open the display and run the event loop until shut down."""
        pygame.init()
        try:
            if self.fullscreen:
                screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            else:
                screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
            pygame.display.set_caption(self.title)
            self._resize(*screen.get_size())
            font = pygame.font.SysFont(None, 20)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                    if event.type == pygame.VIDEORESIZE:
                        screen = pygame.display.get_surface()
                self._tick()
                self._render(screen, font)
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            pygame.quit()
        return 0


def main(argv=None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="factori", description="A tile-based factory game.")
    parser.add_argument("--windowed", action="store_true", help="run in a window")
    parser.add_argument("--width", type=int, default=1280, help="window width")
    parser.add_argument("--height", type=int, default=720, help="window height")
    parser.add_argument("--seed", type=int, default=None, help="world seed")
    args = parser.parse_args(argv)

    scene = Scene(args.width, max(1, args.height - MENU_HEIGHT), seed=args.seed)
    window = MainWindow(args.width, args.height, scene=scene, fullscreen=not args.windowed)
    return window.run()