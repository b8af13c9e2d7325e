import cairo
import pytest
from cairoaffine import config as config_module


class RecordingContext:
    """
    Stands in for a cairo.Context where the real one would refuse a
    matrix that is not invertible. Keeps every matrix it is given.
    """

    def __init__(self):
        self.matrix = cairo.Matrix()
        self.history = []

    def get_matrix(self):
        return cairo.Matrix(*_six(self.matrix))

    def set_matrix(self, matrix):
        self.matrix = matrix
        self.history.append(_six(matrix))


def _six(m):
    return (m.xx, m.yx, m.xy, m.yy, m.x0, m.y0)


@pytest.fixture
def ctx() -> cairo.Context:
    """A fresh cairo context on a small image surface."""
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 16, 16)
    return cairo.Context(surface)


@pytest.fixture
def recording_ctx() -> RecordingContext:
    return RecordingContext()


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from a default, file-less configuration."""
    monkeypatch.delenv("CAIROAFFINE_STRICT", raising=False)
    monkeypatch.setattr(config_module, "config_mgr", None)
    monkeypatch.setattr(config_module, "config", config_module.Config())
