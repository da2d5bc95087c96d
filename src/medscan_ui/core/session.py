"""
Session Controller
==================

This module owns the in-memory state of one user session and applies user
events to it: selecting an analysis kind, selecting or removing an image,
adjusting the image settings, running an analysis and exporting reports.

Classes
-------
SessionState
    Immutable snapshot of everything the views render
AnalysisTicket
    Identifies one in-flight analysis request
SessionController
    Applies events, replaces the state and notifies listeners

Notes
-----
Each transition builds a new :class:`SessionState`; nothing is mutated in
place, so listeners can keep and compare old states freely.

Two events complete asynchronously and are delivered back as calls:

- :meth:`SessionController.image_loaded` when the image decode resolves. A
  handle for an image that is no longer selected is ignored.
  :meth:`SessionController.image_failed` removes the image if its decode
  failed instead.
- :meth:`SessionController.finish_analysis` when the backend answers. Only one
  analysis may be pending; its result is dropped if the image or kind changed
  while it was in flight.

Examples
--------
>>> from medscan_ui.core.session import SessionController
>>> from medscan_ui.core.transform_state import rotate_right
>>> session = SessionController()
>>> handle = session.select_image("scan.png")
>>> session.image_loaded(handle.resolved(800, 600))
True
>>> session.adjust(rotate_right)
>>> session.visual_effect().transform
'rotate(90deg) scale(1) scaleX(1) scaleY(1)'
"""

from dataclasses import dataclass, replace
from datetime import date
import logging
from pathlib import Path
from typing import Callable

from PIL import Image

from .analysis_kinds import AnalysisKind
from .api_client import AnalysisClient
from .config import Settings, get_settings
from .errors import AnalysisInProgressError
from .overlay_mapper import (
    EMPTY_LAYOUT,
    DisplayGeometry,
    ImageHandle,
    OverlayLayout,
    compute_display_geometry,
    map_regions,
)
from .report_export import SaveFn, export_document, export_table
from .results import AnalysisResult, AnalysisSuccess
from .strings import ReportStrings, strings_for
from .transform_renderer import VisualEffect, render_effect
from .transform_state import DEFAULT_SETTINGS, ImageSettings

logger = logging.getLogger(__name__)

Listener = Callable[["SessionState"], None]


@dataclass(frozen=True)
class SessionState:
    kind: AnalysisKind = AnalysisKind.BRAIN_TUMOR
    image: ImageHandle | None = None
    settings: ImageSettings = DEFAULT_SETTINGS
    result: AnalysisResult | None = None
    pending: bool = False
    # bumped whenever the image or kind changes
    generation: int = 0

    @property
    def image_ready(self) -> bool:
        """An image is selected and its decode has resolved."""
        return self.image is not None and self.image.dimensions_known


@dataclass(frozen=True)
class AnalysisTicket:
    generation: int
    kind: AnalysisKind
    image_path: str | Path


class SessionController:
    """
    Applies user events to the session state.

    Parameters
    ----------
    settings : Settings, optional
        Application settings, defaults to :func:`get_settings`
    client : AnalysisClient, optional
        Backend client used by :meth:`run_analysis`. Built from ``settings``
        if omitted.

    Attributes
    ----------
    state : SessionState
        Current state, replaced on every transition
    strings : ReportStrings
        Labels for the configured report locale
    """

    def __init__(
        self, settings: Settings | None = None, client: AnalysisClient | None = None
    ):
        self.config = settings or get_settings()
        self.client = client or AnalysisClient(
            self.config.api_base_url, timeout=self.config.request_timeout
        )
        self.strings: ReportStrings = strings_for(self.config.report_locale)
        self.state = SessionState()
        self._listeners: list[Listener] = []
        self._ticket: AnalysisTicket | None = None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set(self, state: SessionState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    # -- image and kind -------------------------------------------------

    def select_kind(self, kind: AnalysisKind) -> None:
        """Switch analysis kind; clears the image and any result."""
        if not kind.enabled:
            raise ValueError(f"Analysis kind {kind.name} is not available")
        if kind is self.state.kind:
            return
        s = self.state
        self._set(
            replace(
                s,
                kind=kind,
                image=None,
                settings=DEFAULT_SETTINGS,
                result=None,
                generation=s.generation + 1,
            )
        )

    def select_image(self, path: str | Path) -> ImageHandle:
        """
        Select a new image.

        Returns the unresolved handle; the caller decodes it and reports the
        dimensions through :meth:`image_loaded`. Settings are reset and the
        previous result is discarded.
        """
        handle = ImageHandle(path)
        s = self.state
        self._set(
            replace(
                s,
                image=handle,
                settings=DEFAULT_SETTINGS,
                result=None,
                generation=s.generation + 1,
            )
        )
        logger.info("Selected image %s", path)
        return handle

    def image_loaded(self, handle: ImageHandle) -> bool:
        """
        Deliver decoded dimensions for the selected image.

        Returns ``False`` and changes nothing if ``handle`` is not for the
        currently selected image.
        """
        current = self.state.image
        if current is None or str(current.source) != str(handle.source):
            logger.debug("Ignoring stale image load for %s", handle.source)
            return False
        self._set(replace(self.state, image=handle))
        return True

    def image_failed(self, source: str | Path) -> bool:
        """
        Drop the selected image after its decode failed.

        Returns ``False`` and changes nothing if ``source`` is no longer the
        selected image.
        """
        current = self.state.image
        if current is None or str(current.source) != str(source):
            return False
        logger.warning("Could not decode %s; image removed", source)
        self.remove_image()
        return True

    def remove_image(self) -> None:
        s = self.state
        self._set(
            replace(
                s,
                image=None,
                settings=DEFAULT_SETTINGS,
                result=None,
                generation=s.generation + 1,
            )
        )

    # -- image settings -------------------------------------------------

    def adjust(self, setter: Callable[..., ImageSettings], *args) -> None:
        """Apply a transform-state setter, e.g. ``adjust(set_brightness, 120)``."""
        new = setter(self.state.settings, *args)
        if new != self.state.settings:
            self._set(replace(self.state, settings=new))

    def visual_effect(self) -> VisualEffect:
        return render_effect(self.state.settings)

    def display_geometry(self) -> DisplayGeometry:
        if self.state.image is None:
            return DisplayGeometry()
        return compute_display_geometry(self.state.image, self.config.container_width)

    def overlay(self) -> OverlayLayout:
        """Region overlay for the current result, empty unless a tumour with regions was found."""
        s = self.state
        if s.image is None or not isinstance(s.result, AnalysisSuccess):
            return EMPTY_LAYOUT
        if not s.result.shows_overlay:
            return EMPTY_LAYOUT
        return map_regions(s.image, s.result.tumor_regions, self.config.container_width)

    # -- analysis -------------------------------------------------------

    def begin_analysis(self) -> AnalysisTicket | None:
        """
        Mark an analysis as pending.

        Returns
        -------
        AnalysisTicket or None
            Ticket to pass to :meth:`finish_analysis`, or ``None`` if no image
            is selected

        Raises
        ------
        AnalysisInProgressError
            If an analysis is already pending
        """
        s = self.state
        if s.pending:
            raise AnalysisInProgressError("An analysis is already running")
        if s.image is None:
            return None
        ticket = AnalysisTicket(s.generation, s.kind, s.image.source)
        self._ticket = ticket
        self._set(replace(s, pending=True))
        return ticket

    def finish_analysis(self, ticket: AnalysisTicket, result: AnalysisResult) -> bool:
        """
        Accept the result of the pending analysis.

        Returns ``True`` if the result became the session's current result.
        A ticket that is not the pending one is ignored. A result that
        arrives after the image or kind changed clears the pending flag but
        is discarded.
        """
        if ticket != self._ticket:
            logger.debug("Ignoring result for unknown ticket %s", ticket)
            return False
        self._ticket = None
        s = self.state
        if ticket.generation != s.generation:
            logger.info("Discarding result for an image that is no longer selected")
            self._set(replace(s, pending=False))
            return False
        self._set(replace(s, pending=False, result=result))
        return True

    def run_analysis(self) -> AnalysisResult | None:
        """Blocking begin, request and finish in one call."""
        ticket = self.begin_analysis()
        if ticket is None:
            return None
        result = self.client.analyze(ticket.kind, ticket.image_path)
        self.finish_analysis(ticket, result)
        return result

    # -- export ---------------------------------------------------------

    def export_table(self, save: SaveFn, today: date | None = None) -> bool:
        return export_table(
            self.state.result,
            self.state.kind,
            save,
            strings=self.strings,
            today=today,
        )

    def export_document(
        self, snapshot: Image.Image | None, save: SaveFn, today: date | None = None
    ) -> bool:
        return export_document(
            snapshot,
            save,
            strings=self.strings,
            today=today,
            header_height_mm=self.config.header_height_mm,
            font_path=self.config.pdf_font_path,
        )
