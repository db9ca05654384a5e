"""KML to FlightGear flight-plan converter.

Reads a SimBrief route exported as Google Earth KML and writes a
FlightGear ``.fgfp`` flight plan, streaming both documents so memory
use does not grow with the length of the route.
"""

__version__ = "0.1.0"
