"""Pipeline steps for export operations."""

from .extract import ExtractStep
from .fetch import FetchStep
from .rasterize import RasterizeStep
from .render import RenderStep
from .save import SaveStep

__all__ = [
    "ExtractStep",
    "FetchStep",
    "RasterizeStep",
    "RenderStep",
    "SaveStep",
]
