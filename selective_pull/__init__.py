"""selective-pull: build the latest tagged release until it reaches stable."""

__version__ = "0.1.0"
