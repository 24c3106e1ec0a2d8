"""Engine core for 2D side-scrolling platformers: modules, input, Tiled maps, GUI controls and entities."""

__version__ = "0.1.0"