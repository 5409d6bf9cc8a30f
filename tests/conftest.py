import logging

import pytest

from typestats.console import ConsoleManager
from typestats.descriptors import StaticType


@pytest.fixture
def console():
    return ConsoleManager(level=logging.DEBUG, no_color=True)


@pytest.fixture
def diamond():
    """
    Top <- Left, Top <- Right, Bottom extends Left and implements Right.
    """
    top = StaticType("Top", fields={"t"}, methods={"ping", "_secret"}, private={"_secret"})
    left = StaticType("Left", methods={"left"}, interfaces=[top])
    right = StaticType("Right", fields={"r"}, interfaces=[top])
    bottom = StaticType("Bottom", superclass=left, interfaces=[right])
    return {"Top": top, "Left": left, "Right": right, "Bottom": bottom}
