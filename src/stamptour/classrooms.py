"""Classroom markers on the floor maps and the class-info modal."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from stamptour._constants import ACTIVE_CLASS, CLASSROOM_CLASS, NOT_CLASSROOM_CLASS
from stamptour.models.classroom import Classroom
from stamptour.view import Document, Element, Notifier

_logger = logging.getLogger(__name__)


class ClassroomDirectory:
    """Routes marker taps to the class-info modal or a "no booth" notice."""

    def __init__(
        self,
        document: Document,
        notifier: Notifier,
        *,
        modal: Element,
        title: Element,
        close_button: Element,
    ) -> None:
        self._document = document
        self._notifier = notifier
        self.modal = modal
        self.title = title
        self._close_button = close_button

    def bind(self) -> None:
        for marker in self._document.by_class(CLASSROOM_CLASS):
            marker.on("click", lambda _event, m=marker: self.show(m))
        for marker in self._document.by_class(NOT_CLASSROOM_CLASS):
            marker.on("click", lambda _event, m=marker: self._notifier.notify(f"No booth information for {m.id}."))
        self._close_button.on("click", lambda _event: self.hide())

    def show(self, marker: Element) -> None:
        self.title.text = marker.id or ""
        self.modal.display = "flex"

    def hide(self) -> None:
        self.modal.display = "none"

    def apply_class_list(self, classrooms: Iterable[Classroom]) -> list[str]:
        """Mark markers of classrooms hosting a booth; returns the ids found."""
        activated: list[str] = []
        for classroom in classrooms:
            marker = self._document.get(classroom.class_id)
            if marker is None:
                _logger.debug("No map marker for classroom %s", classroom.class_id)
                continue
            marker.add_class(ACTIVE_CLASS)
            activated.append(classroom.class_id)
        return activated
