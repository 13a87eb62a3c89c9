from umplot.raster.backend import RasterBackend
from umplot.raster.canvas import new_canvas
from umplot.raster.draw_text import FontCache

__all__ = ["FontCache", "RasterBackend", "new_canvas"]
