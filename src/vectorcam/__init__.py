"""vectorcam - Convert vector drawings into canonical CAD primitives.

vectorcam reads SVG and DXF drawings and reduces them to a flat set of lines,
circles, arcs and polylines in millimetre units. SVG paths are interpreted
command by command: curves are flattened, elliptical arcs are reconstructed
from their endpoints and rounded rectangle corners are fitted with biarcs.

Example:
    $ vectorcam convert drawing.svg -o drawing.dxf

This writes drawing.dxf with every path converted to CAD primitives.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
