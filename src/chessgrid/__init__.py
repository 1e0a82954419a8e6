"""chessgrid — chess rules engine for a one-keyboard grid board."""

__version__ = "0.1.0"
