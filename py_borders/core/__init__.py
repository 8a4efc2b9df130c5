"""
Core border field and boundary graph functionality.
"""

from .seeds import Seed, SeedSet
from .contending import ContendingSet, SMOOTHING_RADIUS
from .mask_store import BorderMaskStore, UNSET
from .palette import Palette, GROUP_COLORS, DEFAULT_COLOR
from .canvas import PixelBuffer
from .border_field import BorderField, BorderFieldResult, GridConfig
from .vertices import VertexExtractor, ExtractionResult
from .scenario import CircleRegion, DEFAULT_REGIONS, generate_scenario, scale_regions
from .exceptions import BorderFieldError, BorderPairError, PassInProgressError, PassCancelledError

__all__ = ['Seed', 'SeedSet', 'ContendingSet', 'SMOOTHING_RADIUS',
           'BorderMaskStore', 'UNSET', 'Palette', 'GROUP_COLORS', 'DEFAULT_COLOR',
           'PixelBuffer', 'BorderField', 'BorderFieldResult', 'GridConfig',
           'VertexExtractor', 'ExtractionResult',
           'CircleRegion', 'DEFAULT_REGIONS', 'generate_scenario', 'scale_regions',
           'BorderFieldError', 'BorderPairError', 'PassInProgressError', 'PassCancelledError']
