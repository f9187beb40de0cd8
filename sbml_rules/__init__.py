import importlib.metadata

# Running from a source checkout without installed metadata.
try:
    __version__ = importlib.metadata.version("sbml-rule-converter")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
