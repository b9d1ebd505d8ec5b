import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Run the real pygame without opening a window.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class RecordingLabel:
    """Stand-in counter label that remembers every text it was given."""

    def __init__(self):
        self.history = []

    def set_text(self, text):
        self.history.append(text)

    @property
    def text(self):
        return self.history[-1] if self.history else None


@pytest.fixture
def labels():
    from campus_core import BUILDING_TYPES

    return {t: RecordingLabel() for t in BUILDING_TYPES}


@pytest.fixture
def font():
    import pygame

    pygame.font.init()
    yield pygame.font.Font(None, 16)
    pygame.font.quit()
