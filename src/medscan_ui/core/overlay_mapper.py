"""
Overlay Coordinate Mapping
==========================

This module projects backend-returned tumour regions, expressed as fractions of
the original image, onto the scaled surface the image is drawn on.

The image is displayed inside a container of fixed width (600 units by
default). The display geometry is derived from the image's intrinsic pixel
size; each region is then scaled by the display width and height.

Classes
-------
ImageHandle
    Source path plus intrinsic size (unknown until decoded)
Region
    Fractional bounding box relative to the original image
DisplayGeometry
    Scaled display size and scale factor
DisplayRect
    Region projected into display coordinates
OverlayLayout
    Geometry plus the ordered list of projected rectangles

Functions
---------
compute_display_geometry
    Display size for an image handle and container width
map_regions
    Project an ordered sequence of regions onto the display surface

Notes
-----
Unknown image dimensions are an expected transient state (the image decode is
asynchronous), so they produce a zero-size layout with no rectangles instead
of an error.

Regions are not clipped. A region with ``x + width > 1`` yields a rectangle
that extends past the image edge.

Examples
--------
>>> from medscan_ui.core.overlay_mapper import ImageHandle, Region, map_regions
>>> handle = ImageHandle("scan.png", 800, 600)
>>> layout = map_regions(handle, [Region(0, 0, 0.5, 0.5)])
>>> layout.geometry.display_height
450.0
>>> layout.rects[0].as_tuple()
(0.0, 0.0, 300.0, 225.0)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

DEFAULT_CONTAINER_WIDTH = 600


@dataclass(frozen=True)
class ImageHandle:
    """
    Reference to a selected image and its intrinsic pixel size.

    ``width`` and ``height`` stay 0 until the asynchronous decode resolves;
    :meth:`resolved` returns the handle with the decoded size.
    """

    source: str | Path
    width: int = 0
    height: int = 0

    @property
    def dimensions_known(self) -> bool:
        return self.width > 0 and self.height > 0

    def resolved(self, width: int, height: int) -> "ImageHandle":
        return ImageHandle(self.source, int(width), int(height))


@dataclass(frozen=True)
class Region:
    """Bounding box as fractions of the original image size."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: Mapping) -> "Region":
        return cls(
            float(data["x"]),
            float(data["y"]),
            float(data["width"]),
            float(data["height"]),
        )


@dataclass(frozen=True)
class DisplayGeometry:
    display_width: float = 0.0
    display_height: float = 0.0
    scale_factor: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.display_width <= 0 or self.display_height <= 0


@dataclass(frozen=True)
class DisplayRect:
    x: float
    y: float
    width: float
    height: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class OverlayLayout:
    geometry: DisplayGeometry
    rects: tuple[DisplayRect, ...] = ()


EMPTY_LAYOUT = OverlayLayout(DisplayGeometry(), ())


def compute_display_geometry(
    handle: ImageHandle, container_width: float = DEFAULT_CONTAINER_WIDTH
) -> DisplayGeometry:
    """
    Fit an image to the container width, preserving aspect ratio.

    Parameters
    ----------
    handle : ImageHandle
        Image with (possibly unknown) intrinsic size
    container_width : float, default=600
        Width budget of the display container

    Returns
    -------
    DisplayGeometry
        ``scale_factor = container_width / width``, display width and height
        are the intrinsic size times that factor. All zeros if the dimensions
        are not yet known.
    """
    if not handle.dimensions_known or container_width <= 0:
        return DisplayGeometry()
    factor = float(container_width) / handle.width
    return DisplayGeometry(
        display_width=handle.width * factor,
        display_height=handle.height * factor,
        scale_factor=factor,
    )


def map_regions(
    handle: ImageHandle,
    regions: Iterable[Region],
    container_width: float = DEFAULT_CONTAINER_WIDTH,
) -> OverlayLayout:
    """
    Project fractional regions onto the display surface.

    Parameters
    ----------
    handle : ImageHandle
        Image the regions refer to
    regions : iterable of Region
        Regions in backend order. Later regions are drawn on top.
    container_width : float, default=600
        Width budget of the display container

    Returns
    -------
    OverlayLayout
        Display geometry and one rectangle per region, in input order.
        With unknown dimensions the layout is degenerate and has no
        rectangles.

    Notes
    -----
    Every call recomputes from the fractional inputs, so identical inputs
    always produce identical output.
    """
    geometry = compute_display_geometry(handle, container_width)
    if geometry.is_degenerate:
        return EMPTY_LAYOUT
    dw, dh = geometry.display_width, geometry.display_height
    rects = tuple(
        DisplayRect(r.x * dw, r.y * dh, r.width * dw, r.height * dh) for r in regions
    )
    return OverlayLayout(geometry, rects)
