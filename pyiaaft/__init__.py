# pylint: disable=C0114

from ._version import __version__  # noqa: F401

from .method import IAAFT  # noqa: F401
from .iaaft import (  # noqa: F401
    prepare, generate, iterate, iaaft, surrogenerator, SurrogateGenerator)
from .utils import InvalidInputError  # noqa: F401
