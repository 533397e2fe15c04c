"""The collapsible stamp panel and its rendered entries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from stamptour._constants import CHECKED_CLASS, OPEN_CLASS, STAMP_CLASS
from stamptour.models.stamp import Stamp
from stamptour.view import Document, Element

_logger = logging.getLogger(__name__)

CIRCLE_IMAGE = "/images/circle.svg"
CHECK_IMAGE = "/images/check.svg"


class StampPanel:
    """Open/closed state of the panel and its per-stamp entries."""

    def __init__(self, document: Document, container: Element, stamp_list: Element) -> None:
        self._document = document
        self.container = container
        self.stamp_list = stamp_list
        self._entries: dict[str, Element] = {}

    @property
    def is_open(self) -> bool:
        return self.container.has_class(OPEN_CLASS)

    def open(self) -> None:
        if not self.is_open:
            self.container.add_class(OPEN_CLASS)

    def close(self) -> None:
        if self.is_open:
            self.container.remove_class(OPEN_CLASS)

    def toggle(self) -> bool:
        return self.container.toggle_class(OPEN_CLASS)

    def bind(self, show_guide_button: Element, on_show_guide: Callable[[], None]) -> None:
        self.container.on("click", lambda _event: self.toggle())
        show_guide_button.on("click", lambda _event: on_show_guide())

    def render(self, stamps: Iterable[Stamp]) -> list[Element]:
        """Append one entry per stamp not rendered yet."""
        added: list[Element] = []
        for stamp in stamps:
            if stamp.stamp_id in self._entries:
                continue
            entry = self._document.create_element("div", stamp.stamp_id, (STAMP_CLASS,))
            entry.append(self._image(CIRCLE_IMAGE))
            entry.append(self._image(CHECK_IMAGE, "CheckMark"))
            label = entry.append(self._document.create_element("span"))
            heading = label.append(self._document.create_element("h2"))
            heading.text = stamp.stamp_name
            location = label.append(self._document.create_element("p"))
            location.text = stamp.stamp_location
            self.stamp_list.append(entry)
            self._entries[stamp.stamp_id] = entry
            added.append(entry)
        _logger.debug("Rendered %d stamp entries", len(added))
        return added

    def _image(self, src: str, *classes: str) -> Element:
        image = self._document.create_element("img", classes=classes)
        image.attributes["src"] = src
        return image

    def entry(self, stamp_id: str) -> Element | None:
        return self._entries.get(stamp_id)

    def is_checked(self, stamp_id: str) -> bool:
        entry = self._entries.get(stamp_id)
        return entry is not None and entry.has_class(CHECKED_CLASS)

    def mark_checked(self, stamp_id: str) -> bool:
        """Mark a rendered entry; ``True`` only when it was not checked before."""
        entry = self._entries.get(stamp_id)
        if entry is None or entry.has_class(CHECKED_CLASS):
            return False
        entry.add_class(CHECKED_CLASS)
        return True
