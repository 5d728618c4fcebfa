"""Pytest configuration and fixtures."""

import json

import pytest

from nbgrep.config import reset_config
from nbgrep.models import SearchConfig
from nbgrep.parsing import NotebookParser

# Not a real image, but contains the text "CO2" the way base64 data can by chance
FAKE_PNG = "iVBORw0KGgoAAAANSUhEUgCO2AAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"


@pytest.fixture(autouse=True)
def reset_config_after_test(monkeypatch):
    """Isolate tests from NBGREP_ environment settings and reset global config."""
    for name in ("COLOR", "SHOW_FILENAMES", "LINE_INFO", "OUTPUT_TYPES", "JOBS", "LOG_LEVEL"):
        monkeypatch.delenv(f"NBGREP_{name}", raising=False)
    yield
    reset_config()


@pytest.fixture
def sample_notebook_data():
    """Notebook with one markdown cell and one executed code cell with text output."""
    return {
        "cells": [
            {
                "cell_type": "markdown",
                "metadata": {},
                "source": ["no match here"],
            },
            {
                "cell_type": "code",
                "execution_count": 2,
                "metadata": {},
                "source": ["x = 1", "print(CO2)"],
                "outputs": [
                    {
                        "output_type": "execute_result",
                        "execution_count": 2,
                        "metadata": {},
                        "data": {"text/plain": ["CO2 level: 410"]},
                    }
                ],
            },
        ],
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 5,
    }


@pytest.fixture
def image_notebook_data():
    """Notebook whose only output is an image."""
    return {
        "cells": [
            {
                "cell_type": "code",
                "execution_count": 1,
                "metadata": {},
                "source": "plt.plot([1, 2, 3])\nplt.show()",
                "outputs": [
                    {
                        "output_type": "display_data",
                        "metadata": {},
                        "data": {"image/png": FAKE_PNG},
                    }
                ],
            }
        ],
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 5,
    }


@pytest.fixture
def sample_document(sample_notebook_data):
    return NotebookParser().parse_dict(sample_notebook_data)


@pytest.fixture
def write_notebook(tmp_path):
    """Write notebook data to a file under tmp_path and return its path."""

    def _write(data, name="notebook.ipynb"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config():
    """Build a SearchConfig from a pattern string and options."""

    def _make(pattern="CO2", **options):
        return SearchConfig.create(pattern, **options)

    return _make
