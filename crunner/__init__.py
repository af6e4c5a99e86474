"""Runner for read and write methods of smart contracts on EVM chains."""

from importlib import metadata


def __getattr__(name: str) -> str:
    """Expose the package version via ``crunner.__version__``."""
    if name == "__version__":
        try:
            return metadata.version("crunner")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


__all__ = ["__version__"]
