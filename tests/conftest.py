import pytest


class RecordingFunction:
    """Objective wrapper that remembers every point it was evaluated at."""

    def __init__(self, func):
        self.func = func
        self.points = []

    def __call__(self, x):
        self.points.append(x)
        return self.func(x)


@pytest.fixture()
def recording():
    return RecordingFunction
