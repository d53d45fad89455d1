"""saptuner — SAP system tuning arbiter for saptune and sapconf"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("saptuner")
except PackageNotFoundError:
    __version__ = "dev"

__author__ = "saptuner"
