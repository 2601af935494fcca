"""Shared pytest fixtures."""

import pytest


@pytest.fixture
def model():
    """An empty GraphModel."""
    from conceptmapper.graph import GraphModel

    return GraphModel()


@pytest.fixture
def scenario():
    """The four-node reference scenario: (model, nodes by label)."""
    from tests.graph_test_helpers import build_scenario

    return build_scenario()


@pytest.fixture
def log_path(tmp_path):
    """Path for a metrics log that does not exist yet."""
    return tmp_path / "log.csv"


@pytest.fixture
def image_folder(tmp_path):
    """A folder of images with mixed extensions and case."""
    folder = tmp_path / "images"
    folder.mkdir(exist_ok=True)
    for name in ["b.png", "a.png", "c.PNG", "notes.txt", "d.jpg", "e.png"]:
        (folder / name).write_bytes(b"")
    (folder / "sub.png").mkdir()
    return folder


@pytest.fixture
def completable(scenario, tmp_path, log_path):
    """The scenario model with an image and a log selected."""
    model, nodes = scenario
    image = tmp_path / "images" / "a.png"
    image.parent.mkdir(exist_ok=True)
    image.write_bytes(b"")
    model.image_path = image
    model.output_path = log_path
    return model, nodes
