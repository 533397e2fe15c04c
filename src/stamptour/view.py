"""In-memory element tree standing in for the host page.

Components never touch a real DOM. They read and mutate :class:`Element`
state and register handlers with :meth:`Element.on`; a host (or a test)
feeds interactions in with :meth:`Element.dispatch`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from stamptour.exceptions import MissingAnchorError

_logger = logging.getLogger(__name__)

Handler = Callable[["Event"], None]


@dataclass
class Event:
    """A single interaction delivered to an element."""

    type: str
    target: Element
    screen_y: float | None = None
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


class Element:
    """Mutable view state of one page element."""

    def __init__(self, tag: str, id: str | None = None, classes: Iterable[str] = ()) -> None:
        self.tag = tag
        self.id = id
        self.classes: list[str] = []
        for name in classes:
            self.add_class(name)
        self.text = ""
        self.display = ""
        self.visibility = ""
        self.opacity: float = 1.0
        self.color = ""
        self.disabled = False
        self.value = ""
        self.scroll_top: float = 0.0
        self.width: float = 0.0
        self.height: float = 0.0
        self.focused = False
        self.attributes: dict[str, str] = {}
        self.parent: Element | None = None
        self.children: list[Element] = []
        self._document: Document | None = None
        self._handlers: dict[str, list[Handler]] = {}

    def __repr__(self) -> str:
        return f"<{self.tag} id={self.id!r} classes={self.classes!r}>"

    @property
    def first_class(self) -> str | None:
        return self.classes[0] if self.classes else None

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        if name not in self.classes:
            self.classes.append(name)

    def remove_class(self, name: str) -> None:
        if name in self.classes:
            self.classes.remove(name)

    def toggle_class(self, name: str) -> bool:
        """Toggle *name*; returns whether the class is present afterwards."""
        if name in self.classes:
            self.classes.remove(name)
            return False
        self.classes.append(name)
        return True

    def append(self, child: Element) -> Element:
        child.parent = self
        self.children.append(child)
        if self._document is not None:
            self._document.register(child)
        return child

    def iter_tree(self) -> Iterator[Element]:
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def focus(self) -> None:
        if self._document is not None:
            for element in self._document.root.iter_tree():
                element.focused = False
        self.focused = True

    def on(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def dispatch(self, event: Event) -> Event:
        """Run the handlers registered for ``event.type``.

        A failing handler is logged and does not prevent the others from
        running; the failure never reaches the caller.
        """
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception:
                _logger.exception("%s handler on %r failed", event.type, self)
        return event

    def click(self, target: Element | None = None) -> Event:
        return self.dispatch(Event("click", target or self))

    def set_value(self, value: str) -> Event:
        """Replace the value as if typed, then fire ``input``."""
        self.value = value
        return self.dispatch(Event("input", self))


class MediaElement(Element):
    """A video element with just enough playback state for the guide."""

    def __init__(self, tag: str = "video", id: str | None = None, classes: Iterable[str] = ()) -> None:
        super().__init__(tag, id, classes)
        self.paused = True
        self.current_time: float = 0.0
        self.sources: list[tuple[str, str]] = []
        self.play_count = 0

    def play(self) -> None:
        self.paused = False
        self.play_count += 1

    def pause(self) -> None:
        self.paused = True

    def add_source(self, src: str, media_type: str) -> None:
        self.sources.append((src, media_type))


class Document:
    """Id and class index over an element tree."""

    def __init__(self, root: Element | None = None) -> None:
        self.root = root or Element("body")
        self._by_id: dict[str, Element] = {}
        self.register(self.root)

    def register(self, element: Element) -> None:
        for node in element.iter_tree():
            node._document = self
            if node.id:
                self._by_id[node.id] = node

    def create_element(self, tag: str, id: str | None = None, classes: Iterable[str] = ()) -> Element:
        if tag in ("video", "audio"):
            return MediaElement(tag, id, classes)
        return Element(tag, id, classes)

    def get(self, element_id: str) -> Element | None:
        element = self._by_id.get(element_id)
        if element is None or element._document is not self:
            return None
        return element

    def require(self, *element_ids: str) -> list[Element]:
        """Return the anchors in order; raise :class:`MissingAnchorError` naming all absent ones."""
        missing = [element_id for element_id in element_ids if self.get(element_id) is None]
        if missing:
            raise MissingAnchorError(missing)
        return [self._by_id[element_id] for element_id in element_ids]

    def by_class(self, name: str) -> list[Element]:
        return [element for element in self.root.iter_tree() if element.has_class(name)]


class Notifier(Protocol):
    """Blocking user-facing notice (an ``alert`` on the real page)."""

    def notify(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier for headless use: every notice goes to the log."""

    def notify(self, message: str) -> None:
        _logger.warning("Notice: %s", message)
