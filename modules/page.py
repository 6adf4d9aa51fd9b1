#!/usr/bin/env python3
"""Page bootstrap: the Python counterpart of loading the site script."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core import Core, EventBus, FrameScheduler
from modules.contact import ContactForm, Sender
from modules.cursor_effects import CursorEffects, Viewport, build_layers
from modules.dom import Element
from modules.environment import DESKTOP, Environment
from modules.gallery import FileInput, GalleryPreview
from modules.reveal import RevealObserver


@dataclass
class Document:
    """Elements the page script looks up by selector or id."""

    glow: Element = field(default_factory=lambda: Element(classes={"cursor-glow"}))
    layers: List[Element] = field(
        default_factory=lambda: [Element(classes={"gradient-layer"}) for _ in range(3)]
    )
    fade_ins: List[Element] = field(default_factory=list)
    gallery_grid: Element = field(default_factory=lambda: Element(id="galleryGrid"))
    image_input: Optional[FileInput] = None
    form_status: Element = field(default_factory=lambda: Element(tag="p", id="formStatus"))
    has_contact_form: bool = True
    viewport: Viewport = field(default_factory=lambda: Viewport(1280, 800))


def build_page(
    document: Document,
    environment: Environment = DESKTOP,
    *,
    sender: Optional[Sender] = None,
    event_bus: Optional[EventBus] = None,
    scheduler: Optional[FrameScheduler] = None,
) -> Core:
    core = Core(event_bus=event_bus or EventBus(), scheduler=scheduler)
    core.register_module(
        CursorEffects(
            document.glow,
            build_layers(document.layers),
            document.viewport,
            environment,
        )
    )
    core.register_module(RevealObserver(document.fade_ins))
    if document.image_input is not None:
        core.register_module(GalleryPreview(document.gallery_grid, document.image_input))
    if document.has_contact_form and sender is not None:
        core.register_module(ContactForm(sender, document.form_status))
    return core


__all__ = ["Document", "build_page"]
