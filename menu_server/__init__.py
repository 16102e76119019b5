"""Remote configuration and real-time friend relay server for the menu add-on."""

__version__ = "1.0.0"
