"""First-visit guide wizard.

The guide walks a visitor through four steps:

* ``INTRO``: where the NFC reader sits on their device (or how to scan
  without NFC), with a primed demo video.
* ``SCAN``: a four-second demo of scanning a stamp.
* ``IDENTITY``: student number and name capture.
* ``SUBMIT``: a single login request; success stores the visitor identity
  and the "guide shown" marker and closes the modal.

Progress is gated on the next button: while it is disabled the current
step's completion condition has not held yet and :meth:`TourController.advance`
does nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from stamptour._api.login import build_login_request, submit_login
from stamptour._constants import (
    GUIDE_HINT,
    GUIDE_MODAL,
    GUIDE_MODAL_CLOSE,
    GUIDE_SHOWN_KEY,
    GUIDE_TEXT,
    GUIDE_TITLE,
    GUIDE_VIDEO,
    MIN_NAME_LENGTH,
    NEXT_GUIDE_BUTTON,
    PRIVACY_CONTAINER,
    REPLAY_CONTAINER,
    REPLAY_GUIDE_BUTTON,
    SHOW_CLASS,
    STUDENT_ID_INPUT,
    STUDENT_ID_LENGTH,
    STUDENT_NAME_INPUT,
    USER_ID_KEY,
    USER_NAME_KEY,
)
from stamptour._transport import NetworkGateway
from stamptour.config import StampTourConfig
from stamptour.device import DeviceProfile
from stamptour.exceptions import MissingAnchorError, StampTourLoginError
from stamptour.scheduler import Scheduler
from stamptour.store import PersistentStore
from stamptour.view import Document, Element, Event, MediaElement, Notifier

_logger = logging.getLogger(__name__)

NEXT_LABEL = "Next"
START_LABEL = "Start"
IDENTITY_TITLE = "Tell us who you are before you start"
IDENTITY_HINT = "Using someone else's details may lead to penalties."
WARNING_COLOR = "#FF0000"
LOGIN_FAILED_NOTICE = "Login failed. Please try again."


class GuideStep(IntEnum):
    INTRO = 0
    SCAN = 1
    IDENTITY = 2
    SUBMIT = 3


def intro_copy(profile: DeviceProfile) -> str:
    if profile.is_wide_screen:
        return f'On {profile.device_label}, tap the "Scan Tag" button to take part.'
    return f"The NFC reader on {profile.device_label} is at the {profile.nfc_location_label}."


def scan_copy(profile: DeviceProfile) -> str:
    if profile.is_wide_screen:
        return "Scan the stamp icon with your camera."
    return f"Hold the {profile.nfc_location_label} of {profile.device_label} against the stamp icon."


def hint_copy(profile: DeviceProfile) -> str:
    return f"Here's how to take part on {profile.device_label}."


def sanitize_student_id(value: str) -> str:
    """Digits only, at most five of them."""
    return "".join(ch for ch in value if ch.isdecimal() and ch.isascii())[:STUDENT_ID_LENGTH]


@dataclass(frozen=True)
class GuideAnchors:
    """Elements of the guide modal."""

    root: Element
    modal: Element
    video: MediaElement
    title: Element
    hint: Element
    text: Element
    next_button: Element
    replay_button: Element
    replay_container: Element
    privacy_container: Element
    student_id: Element
    student_name: Element
    close_button: Element | None = None

    @classmethod
    def resolve(cls, document: Document) -> GuideAnchors:
        (
            modal,
            video,
            title,
            hint,
            text,
            next_button,
            replay_button,
            replay_container,
            privacy_container,
            student_id,
            student_name,
        ) = document.require(
            GUIDE_MODAL,
            GUIDE_VIDEO,
            GUIDE_TITLE,
            GUIDE_HINT,
            GUIDE_TEXT,
            NEXT_GUIDE_BUTTON,
            REPLAY_GUIDE_BUTTON,
            REPLAY_CONTAINER,
            PRIVACY_CONTAINER,
            STUDENT_ID_INPUT,
            STUDENT_NAME_INPUT,
        )
        if not isinstance(video, MediaElement):
            raise MissingAnchorError([f"{GUIDE_VIDEO} (media element)"])
        return cls(
            root=document.root,
            modal=modal,
            video=video,
            title=title,
            hint=hint,
            text=text,
            next_button=next_button,
            replay_button=replay_button,
            replay_container=replay_container,
            privacy_container=privacy_container,
            student_id=student_id,
            student_name=student_name,
            close_button=document.get(GUIDE_MODAL_CLOSE),
        )


class TourController:
    """Sequencer of the guide wizard.

    Timed transitions are tagged with a generation number. Closing the modal
    or replaying bumps the generation when
    ``config.cancel_stale_guide_steps`` is set, so callbacks scheduled by an
    abandoned run never touch the modal.
    """

    def __init__(
        self,
        config: StampTourConfig,
        anchors: GuideAnchors,
        profile: DeviceProfile,
        gateway: NetworkGateway,
        store: PersistentStore,
        scheduler: Scheduler,
        notifier: Notifier,
    ) -> None:
        self._config = config
        self._ui = anchors
        self._profile = profile
        self._gateway = gateway
        self._store = store
        self._scheduler = scheduler
        self._notifier = notifier
        self._step = GuideStep.INTRO
        self._running = False
        self._submitting = False
        self._generation = 0
        self._intro_title = anchors.title.text

    @property
    def step(self) -> GuideStep:
        return self._step

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def bind(self) -> None:
        ui = self._ui
        for src, media_type in self._profile.video_sources:
            ui.video.add_source(src, media_type)
        ui.video.pause()
        ui.hint.text = hint_copy(self._profile)

        ui.next_button.on("click", lambda _event: self._scheduler.spawn(self.advance()))
        ui.replay_button.on("click", lambda _event: self._scheduler.spawn(self.replay()))
        ui.student_id.on("input", self._on_student_id_input)
        ui.student_name.on("input", self._on_student_name_input)
        if ui.close_button is not None:
            ui.close_button.on("click", lambda _event: self.close())
        if self._profile.suppress_double_tap:
            ui.root.on("dblclick", lambda event: event.prevent_default())

    def _on_student_id_input(self, _event: Event) -> None:
        field = self._ui.student_id
        field.value = sanitize_student_id(field.value)
        if len(field.value) == STUDENT_ID_LENGTH:
            self._ui.student_name.focus()

    def _on_student_name_input(self, _event: Event) -> None:
        if self._step is not GuideStep.SUBMIT or self._submitting:
            return
        self._ui.next_button.disabled = not self._name_ready()

    def _name_ready(self) -> bool:
        return len(self._ui.student_name.value) >= MIN_NAME_LENGTH

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    async def begin(self) -> bool:
        """Open the guide; no-op while a run is active.

        A run closed midway resumes on the screen it was closed on. The
        identity form keeps its inputs and its name gate; earlier screens
        are shown again so their timed transitions run anew.
        """
        if self._running:
            _logger.debug("Guide already running at step %s", self._step.name)
            return False
        self._running = True
        self._ui.modal.display = "flex"
        if self._step is GuideStep.SUBMIT:
            self._ui.next_button.disabled = self._submitting or not self._name_ready()
            return True
        if self._step is not GuideStep.INTRO:
            # The step field names the next screen; step back to the one on display.
            self._step = GuideStep(self._step - 1)
        self._ui.next_button.disabled = False
        await self.advance()
        return True

    async def replay(self) -> None:
        """Restart the guide from the intro."""
        self._invalidate_pending()
        self._step = GuideStep.INTRO
        self._running = True
        self._ui.modal.display = "flex"
        self._ui.next_button.disabled = False
        await self.advance()

    def close(self) -> None:
        """Hide the modal and end the run, keeping the step as it is."""
        self._ui.modal.display = "none"
        self._running = False
        self._invalidate_pending()

    def _invalidate_pending(self) -> None:
        if self._config.cancel_stale_guide_steps:
            self._generation += 1

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        generation = self._generation

        def _run() -> None:
            if generation != self._generation:
                _logger.debug("Dropping stale guide transition (generation %d)", generation)
                return
            callback()

        self._scheduler.call_later(delay, _run)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def advance(self) -> None:
        """Perform the current step; ignored until the step may proceed."""
        ui = self._ui
        if ui.next_button.disabled:
            _logger.debug("Ignoring advance at step %s: next is disabled", self._step.name)
            return

        ui.next_button.disabled = True
        ui.video.play()
        ui.video.pause()
        ui.video.opacity = 1.0

        step = self._step
        _logger.debug("Guide step %s", step.name)
        if step is GuideStep.INTRO:
            self._show_intro()
        elif step is GuideStep.SCAN:
            self._show_scan()
        elif step is GuideStep.IDENTITY:
            self._show_identity()
        else:
            await self._submit()

    def _show_intro(self) -> None:
        ui = self._ui
        self._restore_media_chrome()
        ui.video.current_time = 0.0
        ui.text.text = intro_copy(self._profile)
        self._step = GuideStep.SCAN

        def _prime() -> None:
            # Play-then-pause so the demo later starts without a buffering stall.
            ui.video.current_time = 0.0
            ui.video.play()
            ui.video.pause()
            ui.next_button.disabled = False

        self._schedule(self._config.guide_prime_delay, _prime)

    def _show_scan(self) -> None:
        ui = self._ui
        ui.video.play()
        ui.text.text = scan_copy(self._profile)
        self._step = GuideStep.IDENTITY

        def _finish_demo() -> None:
            ui.video.pause()
            ui.next_button.disabled = False
            ui.replay_container.visibility = "visible"

        self._schedule(self._config.guide_demo_duration, _finish_demo)

    def _show_identity(self) -> None:
        ui = self._ui
        ui.next_button.text = START_LABEL
        ui.text.display = "none"
        ui.video.display = "none"
        ui.replay_container.display = "none"
        ui.privacy_container.display = "flex"
        ui.title.text = IDENTITY_TITLE
        ui.hint.text = IDENTITY_HINT
        ui.hint.color = WARNING_COLOR
        ui.student_id.display = "block"
        ui.student_name.display = "block"
        self._step = GuideStep.SUBMIT

        def _reveal_inputs() -> None:
            ui.student_id.add_class(SHOW_CLASS)
            ui.student_name.add_class(SHOW_CLASS)

        self._schedule(self._config.input_reveal_delay, _reveal_inputs)
        # A name kept from an earlier attempt already satisfies the gate.
        ui.next_button.disabled = not self._name_ready()

    def _restore_media_chrome(self) -> None:
        ui = self._ui
        ui.next_button.text = NEXT_LABEL
        ui.title.text = self._intro_title
        ui.hint.text = hint_copy(self._profile)
        ui.hint.color = ""
        ui.text.display = ""
        ui.video.display = ""
        ui.replay_container.display = ""
        ui.privacy_container.display = "none"
        for field in (ui.student_id, ui.student_name):
            field.display = "none"
            field.remove_class(SHOW_CLASS)

    async def _submit(self) -> None:
        if self._submitting:
            return
        ui = self._ui
        if not self._name_ready():
            _logger.debug("Not submitting: name shorter than %d characters", MIN_NAME_LENGTH)
            ui.next_button.disabled = True
            return
        request = build_login_request(ui.student_id.value, ui.student_name.value)
        self._submitting = True
        try:
            response = await submit_login(self._gateway, request)
        except StampTourLoginError as exc:
            _logger.warning("Guide login failed (status=%s)", exc.status_code)
            self._notifier.notify(LOGIN_FAILED_NOTICE)
            # Captured fields are kept; next allows a direct retry.
            ui.next_button.disabled = not self._name_ready()
            return
        finally:
            self._submitting = False

        self._notifier.notify(f"Welcome, {response.user_name} ({response.user_id}).")
        self._store.set(USER_ID_KEY, response.user_id, self._config.user_expiry_days)
        self._store.set(USER_NAME_KEY, request.user_name, self._config.user_expiry_days)
        self._store.set(GUIDE_SHOWN_KEY, "true", self._config.guide_marker_expiry_days)
        self._step = GuideStep.INTRO
        ui.modal.display = "none"
        self._running = False
