"""Season-by-season player rating development and calibration tooling."""

__version__ = "0.1.0"
