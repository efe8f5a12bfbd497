# orbitfield/ui/widgets.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional
import pygame


@dataclass
class WidgetContext:
    """
    Lightweight context passed into widget methods.

    - surface:  the logical surface the widget should draw into
    - scene:    the owning Scene (or None if not relevant)
    - renderer: the active renderer (CanvasRenderer or a test double)
    """
    surface: pygame.Surface
    scene: object | None
    renderer: object


class Widget:
    """
    Minimal base class for UI widgets.

    Responsibilities:
    - Keep a rect in surface coordinates (for layout and hit-testing).
    - Optionally have children.
    - Provide overridable hooks: layout / draw / handle_event.
    """

    def __init__(self) -> None:
        self.rect: pygame.Rect = pygame.Rect(0, 0, 0, 0)
        self.visible: bool = True
        self.enabled: bool = True
        self.children: List[Widget] = []

    def add_child(self, child: "Widget") -> "Widget":
        self.children.append(child)
        return child

    def layout(self, ctx: WidgetContext) -> None:
        for child in self.children:
            child.layout(ctx)

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        for child in self.children:
            child.draw(ctx)

    def handle_event(self, event, ctx: WidgetContext) -> bool:
        """
        Give this widget a chance to consume an event.
        Return True if the event is handled and should not propagate further.
        """
        # later-added children are on top
        for child in reversed(self.children):
            if child.handle_event(event, ctx):
                return True
        return False


def _font(renderer, name: str = "small_font") -> pygame.font.Font:
    return getattr(renderer, name, None) or getattr(renderer, "font")


class LabelWidget(Widget):
    def __init__(
        self,
        text: str | Callable[[], str],
        *,
        color: Optional[tuple[int, int, int]] = None,
        padding: int = 0,
        min_width: int = 0,
    ) -> None:
        super().__init__()
        self._text = text
        self.color = color
        self.padding = padding
        self.min_width = min_width

    @property
    def text(self) -> str:
        return self._text() if callable(self._text) else self._text

    def layout(self, ctx: WidgetContext) -> None:
        w, h = _font(ctx.renderer).size(self.text)
        self.rect.width = max(self.min_width, w + 2 * self.padding)
        self.rect.height = h + 2 * self.padding
        super().layout(ctx)

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        color = self.color or getattr(ctx.renderer, "fg", (255, 255, 255))
        surf = _font(ctx.renderer).render(self.text, True, color)
        ctx.surface.blit(surf, (self.rect.x + self.padding, self.rect.y + self.padding))
        super().draw(ctx)


class ButtonWidget(Widget):
    def __init__(
        self,
        text: str,
        *,
        on_click: Optional[Callable[["ButtonWidget"], None]] = None,
        padding_x: int = 8,
        padding_y: int = 2,
    ) -> None:
        super().__init__()
        self.text = text
        self.on_click = on_click
        self.padding_x = padding_x
        self.padding_y = padding_y
        self.hovered = False
        self.pressed = False

    def layout(self, ctx: WidgetContext) -> None:
        w, h = _font(ctx.renderer).size(self.text)
        self.rect.width = w + 2 * self.padding_x
        self.rect.height = h + 2 * self.padding_y
        super().layout(ctx)

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        fg = getattr(ctx.renderer, "fg", (255, 255, 255))
        sel = getattr(ctx.renderer, "sel", (255, 255, 0))
        dim = getattr(ctx.renderer, "dim", (150, 150, 150))

        border_col = sel if (self.hovered or self.pressed) else dim
        pygame.draw.rect(ctx.surface, (30, 30, 50), self.rect)
        pygame.draw.rect(ctx.surface, border_col, self.rect, 1)

        text_surf = _font(ctx.renderer).render(self.text, True, fg)
        tx = self.rect.x + (self.rect.width - text_surf.get_width()) // 2
        ty = self.rect.y + (self.rect.height - text_surf.get_height()) // 2
        ctx.surface.blit(text_surf, (tx, ty))
        super().draw(ctx)

    def handle_event(self, event, ctx: WidgetContext) -> bool:
        if not (self.visible and self.enabled):
            return False

        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.pressed = True
                return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            was_pressed = self.pressed
            self.pressed = False
            if was_pressed and self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click(self)
                return True

        return super().handle_event(event, ctx)


class HBox(Widget):
    """
    Horizontal layout container: children left -> right, vertically centred.
    """

    def __init__(self, *, spacing: int = 4, padding: int = 0) -> None:
        super().__init__()
        self.spacing = spacing
        self.padding = padding

    def layout(self, ctx: WidgetContext) -> None:
        for child in self.children:
            child.layout(ctx)

        max_h = max((child.rect.height for child in self.children), default=0)
        self.rect.height = max_h + 2 * self.padding

        x = self.rect.x + self.padding
        for child in self.children:
            child_y = self.rect.y + (self.rect.height - child.rect.height) // 2
            child.rect.topleft = (x, child_y)
            x += child.rect.width + self.spacing
        self.rect.width = (x - self.rect.x) + self.padding - self.spacing


class VBox(Widget):
    """
    Vertical layout container: children top -> bottom, left aligned.
    """

    def __init__(self, *, spacing: int = 4, padding: int = 0) -> None:
        super().__init__()
        self.spacing = spacing
        self.padding = padding

    def layout(self, ctx: WidgetContext) -> None:
        for child in self.children:
            child.layout(ctx)

        y = self.rect.y + self.padding
        for child in self.children:
            child.rect.topleft = (self.rect.x + self.padding, y)
            # nested containers position their own children from the new origin
            child.layout(ctx)
            y += child.rect.height + self.spacing

        max_w = max((child.rect.width for child in self.children), default=0)
        self.rect.width = max_w + 2 * self.padding
        self.rect.height = (y - self.rect.y) + self.padding - self.spacing

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        panel = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        panel.fill((10, 10, 20, 190))
        ctx.surface.blit(panel, self.rect.topleft)
        super().draw(ctx)


class StepperWidget(HBox):
    """
    "label: value [-] [+]" row editing an integer through getter/setter
    callbacks. Values are clamped to [minimum, maximum].
    """

    def __init__(
        self,
        label: str,
        get: Callable[[], int],
        set: Callable[[int], None],
        *,
        minimum: int = 0,
        maximum: int = 10000,
        step: int = 1,
    ) -> None:
        super().__init__(spacing=6)
        self.label = label
        self.get = get
        self.set = set
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self.value_label = self.add_child(
            LabelWidget(lambda: f"{self.label}: {self.get()}", min_width=150)
        )
        self.minus = self.add_child(ButtonWidget("-", on_click=lambda _b: self.nudge(-1)))
        self.plus = self.add_child(ButtonWidget("+", on_click=lambda _b: self.nudge(1)))

    def nudge(self, direction: int) -> int:
        value = self.get() + direction * self.step
        value = max(self.minimum, min(self.maximum, value))
        self.set(value)
        return value


class ChoiceWidget(HBox):
    """Row of buttons picking one of several named options."""

    def __init__(
        self,
        label: str,
        options: List[str],
        get: Callable[[], str],
        set: Callable[[str], None],
    ) -> None:
        super().__init__(spacing=6)
        self.get = get
        self.set = set
        self.add_child(LabelWidget(label, min_width=150))
        self.buttons: List[ButtonWidget] = []
        for option in options:
            btn = ButtonWidget(option, on_click=lambda b: self.set(b.text))
            self.buttons.append(self.add_child(btn))

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        super().draw(ctx)
        sel = getattr(ctx.renderer, "sel", (255, 255, 0))
        for btn in self.buttons:
            if btn.text == self.get():
                pygame.draw.rect(ctx.surface, sel, btn.rect, 2)
